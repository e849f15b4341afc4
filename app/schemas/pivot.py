import datetime as dt
from typing import Literal

from pydantic import BaseModel

AGGREGATE_ROW_IDS = ("avg", "max", "min")


class PivotRow(BaseModel):
    id: str
    label: str
    kind: Literal["hotel", "aggregate"] = "hotel"
    cells: dict[dt.date, float | None] = {}
    sites: dict[dt.date, str | None] = {}

    @property
    def is_aggregate(self) -> bool:
        return self.kind == "aggregate"


class PivotTable(BaseModel):
    rows: list[PivotRow] = []
    dates: list[dt.date] = []

    def hotel_rows(self) -> list[PivotRow]:
        return [row for row in self.rows if not row.is_aggregate]

    def aggregate_rows(self) -> list[PivotRow]:
        return [row for row in self.rows if row.is_aggregate]

    def row(self, row_id: str) -> PivotRow | None:
        """Look up a row by id. Aggregate ids resolve to the aggregate row."""
        aggregate = row_id in AGGREGATE_ROW_IDS
        for row in self.rows:
            if row.id == row_id and row.is_aggregate == aggregate:
                return row
        return None

    @property
    def last_date(self) -> dt.date | None:
        return self.dates[-1] if self.dates else None


class StatsSummary(BaseModel):
    mode: Literal["pivot"] = "pivot"
    date: dt.date | None = None
    mean: float | None = None
    median: float | None = None
    min: float | None = None
    max: float | None = None
    count: int = 0

    @property
    def has_data(self) -> bool:
        return self.count > 0


class ObservationStats(BaseModel):
    mode: Literal["observations"] = "observations"
    hotels: list[str] = []
    hotel_count: int = 0
    date_count: int = 0
    avg_price: float | None = None
    min_price: float | None = None
    max_price: float | None = None
    last_date: dt.date | None = None


StatsResult = StatsSummary | ObservationStats


class ChartSeries(BaseModel):
    label: str
    data: list[float | None]
    color: str
    border_dash: list[int] | None = None
    fill: bool = False
    site_labels: list[str | None] | None = None


class ChartData(BaseModel):
    labels: list[dt.date] = []
    datasets: list[ChartSeries] = []


class SiteSeries(BaseModel):
    label: str
    data: list[float | None]
    color: str


class SiteChartData(BaseModel):
    hotel_name: str
    labels: list[dt.date] = []
    datasets: list[SiteSeries] = []
