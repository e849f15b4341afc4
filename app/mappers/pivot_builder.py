import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date

from app.schemas.pivot import AGGREGATE_ROW_IDS, PivotRow, PivotTable
from app.schemas.prices import PriceObservation

logger = logging.getLogger(__name__)

AGGREGATE_LABELS: dict[str, dict[str, str]] = {
    "ko": {"avg": "평균 가격", "max": "최고 가격", "min": "최저 가격"},
    "en": {"avg": "Average price", "max": "Highest price", "min": "Lowest price"},
}
DEFAULT_LABEL_LOCALE = "ko"


def aggregate_labels(locale: str | None = None) -> dict[str, str]:
    """Display labels for the avg/max/min rows. Unknown locales fall back to Korean."""
    return AGGREGATE_LABELS.get(locale or DEFAULT_LABEL_LOCALE, AGGREGATE_LABELS[DEFAULT_LABEL_LOCALE])


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for positive prices."""
    return math.floor(value + 0.5)


def _row_order(
    observations: Sequence[PriceObservation],
    hotel_names: Iterable[str] | None,
) -> list[str]:
    # Requested names keep request order; hotels seen only in observations follow.
    order: dict[str, None] = {}
    for name in hotel_names or ():
        order.setdefault(name, None)
    for obs in observations:
        order.setdefault(obs.hotel_name, None)
    return list(order)


def _lowest_observations(
    observations: Sequence[PriceObservation],
) -> dict[tuple[str, date], PriceObservation]:
    # On a tie the first observation seen keeps the cell, and with it its site.
    lowest: dict[tuple[str, date], PriceObservation] = {}
    for obs in observations:
        key = (obs.hotel_name, obs.date)
        current = lowest.get(key)
        if current is None or obs.room_price < current.room_price:
            lowest[key] = obs
    return lowest


def build_pivot_table(
    observations: Iterable[PriceObservation],
    hotel_names: Iterable[str] | None = None,
    labels: dict[str, str] | None = None,
) -> PivotTable:
    """Pivot raw observations into one row per hotel and one column per date.

    Each cell holds the lowest price any source reported for that hotel and
    date, or None when nothing was observed. Three aggregate rows (avg, max,
    min) are appended last; an aggregate cell is None when no hotel has a
    price on that date.

    Hotels listed in ``hotel_names`` always get a row, even when none of
    their observations came back.

    Hotel rows also record, per date, the site that reported the lowest
    price (``sites``); aggregate rows leave it empty.
    """
    observations = list(observations)
    labels = {**aggregate_labels(), **(labels or {})}

    hotels = _row_order(observations, hotel_names)
    dates = sorted({obs.date for obs in observations})
    lowest = _lowest_observations(observations)

    rows = []
    for hotel in hotels:
        winners = {d: lowest.get((hotel, d)) for d in dates}
        rows.append(
            PivotRow(
                id=hotel,
                label=hotel,
                cells={d: obs.room_price if obs else None for d, obs in winners.items()},
                sites={d: obs.site if obs else None for d, obs in winners.items()},
            )
        )

    aggregates = {
        row_id: PivotRow(id=row_id, label=labels[row_id], kind="aggregate")
        for row_id in AGGREGATE_ROW_IDS
    }
    for d in dates:
        values = [row.cells[d] for row in rows if row.cells[d] is not None]
        if values:
            aggregates["avg"].cells[d] = round_half_up(sum(values) / len(values))
            aggregates["max"].cells[d] = max(values)
            aggregates["min"].cells[d] = min(values)
        else:
            for row in aggregates.values():
                row.cells[d] = None

    logger.debug(
        "Built pivot table: %d hotel rows x %d dates from %d observations",
        len(rows), len(dates), len(observations),
    )
    return PivotTable(rows=[*rows, *aggregates.values()], dates=dates)
