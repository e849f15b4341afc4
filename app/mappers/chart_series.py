from collections.abc import Iterable
from datetime import date

from app.schemas.pivot import ChartData, ChartSeries, PivotTable, SiteChartData, SiteSeries
from app.schemas.prices import PriceObservation

AGGREGATE_COLORS = {
    "avg": "#2c3e50",
    "max": "#e74c3c",
    "min": "#2ecc71",
}
AGGREGATE_DASH = [5, 5]
UNKNOWN_SITE = "unknown"


def hotel_color(index: int) -> str:
    """Hue rotates by 60 degrees per row, so six hotels get distinct colours."""
    return f"hsl({(index * 60) % 360}, 70%, 50%)"


def site_color(index: int) -> str:
    return f"hsl({(index * 60) % 360}, 50%, 80%)"


def build_chart_data(table: PivotTable) -> ChartData:
    """Project every pivot row, aggregates included, into a line-chart dataset.

    Hotel datasets carry ``site_labels``, the source site behind each point.
    """
    datasets: list[ChartSeries] = []
    for idx, row in enumerate(table.rows):
        if row.is_aggregate:
            color = AGGREGATE_COLORS[row.id]
            dash = list(AGGREGATE_DASH)
            site_labels = None
        else:
            color = hotel_color(idx)
            dash = None
            site_labels = [row.sites.get(d) for d in table.dates]
        datasets.append(
            ChartSeries(
                label=row.label,
                data=[row.cells.get(d) for d in table.dates],
                color=color,
                border_dash=dash,
                site_labels=site_labels,
            )
        )
    return ChartData(labels=list(table.dates), datasets=datasets)


def build_site_series(
    hotel_name: str,
    observations: Iterable[PriceObservation],
) -> SiteChartData:
    """Break one hotel's prices down by source site, lowest price per date."""
    observations = list(observations)
    dates = sorted({obs.date for obs in observations})
    sites = list(dict.fromkeys(obs.site or UNKNOWN_SITE for obs in observations))

    lowest: dict[tuple[str, date], float] = {}
    for obs in observations:
        key = (obs.site or UNKNOWN_SITE, obs.date)
        if key not in lowest or obs.room_price < lowest[key]:
            lowest[key] = obs.room_price

    datasets = [
        SiteSeries(
            label=site,
            data=[lowest.get((site, d)) for d in dates],
            color=site_color(idx),
        )
        for idx, site in enumerate(sites)
    ]
    return SiteChartData(hotel_name=hotel_name, labels=dates, datasets=datasets)
