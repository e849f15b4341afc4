import logging
from collections.abc import Sequence
from datetime import date

from app.mappers.chart_series import build_chart_data, build_site_series
from app.mappers.pivot_builder import aggregate_labels, build_pivot_table
from app.mappers.stats_summarizer import StatsMode, compute_stats, summarize_pivot
from app.schemas.pivot import ChartData, PivotTable, SiteChartData, StatsResult
from app.schemas.prices import PriceFetchReport
from app.schemas.responses import DashboardResponse
from app.services.price_query import PriceQueryService

logger = logging.getLogger(__name__)


class DashboardService:
    """Fetch competitor prices and derive the pivot, stats and chart views."""

    def __init__(self, price_query: PriceQueryService, label_locale: str = "ko"):
        self._price_query = price_query
        self._labels = aggregate_labels(label_locale)

    async def fetch(
        self,
        hotel_names: Sequence[str],
        start: date,
        end: date,
        token: str | None = None,
    ) -> PriceFetchReport:
        return await self._price_query.fetch_all(hotel_names, start, end, token=token)

    def pivot(self, report: PriceFetchReport) -> PivotTable:
        return build_pivot_table(
            report.all_observations(),
            hotel_names=report.hotel_names,
            labels=self._labels,
        )

    async def pivot_table(
        self,
        hotel_names: Sequence[str],
        start: date,
        end: date,
        token: str | None = None,
    ) -> PivotTable:
        report = await self.fetch(hotel_names, start, end, token=token)
        return self.pivot(report)

    async def stats(
        self,
        hotel_names: Sequence[str],
        start: date,
        end: date,
        mode: StatsMode = StatsMode.pivot,
        target_date: date | None = None,
        token: str | None = None,
    ) -> StatsResult:
        report = await self.fetch(hotel_names, start, end, token=token)
        return compute_stats(mode, self.pivot(report), report.all_observations(), target_date)

    async def chart(
        self,
        hotel_names: Sequence[str],
        start: date,
        end: date,
        token: str | None = None,
    ) -> ChartData:
        return build_chart_data(await self.pivot_table(hotel_names, start, end, token=token))

    async def site_chart(
        self,
        hotel_name: str,
        start: date,
        end: date,
        token: str | None = None,
    ) -> SiteChartData:
        report = await self.fetch([hotel_name], start, end, token=token)
        return build_site_series(hotel_name, report.observations.get(hotel_name, []))

    async def dashboard(
        self,
        hotel_names: Sequence[str],
        start: date,
        end: date,
        stats_date: date | None = None,
        token: str | None = None,
    ) -> DashboardResponse:
        report = await self.fetch(hotel_names, start, end, token=token)
        table = self.pivot(report)
        if report.errors:
            logger.warning(
                "Dashboard built without prices for: %s", ", ".join(report.failed_hotels)
            )
        return DashboardResponse(
            start_date=start,
            end_date=end,
            hotel_names=report.hotel_names,
            table=table,
            stats=summarize_pivot(table, stats_date),
            chart=build_chart_data(table),
            errors=report.errors,
        )
