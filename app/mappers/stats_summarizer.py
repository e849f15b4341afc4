from collections.abc import Sequence
from datetime import date
from enum import StrEnum

from app.mappers.pivot_builder import round_half_up
from app.schemas.pivot import ObservationStats, PivotTable, StatsSummary
from app.schemas.prices import PriceObservation


class StatsMode(StrEnum):
    pivot = "pivot"
    observations = "observations"


def prices_for_date(table: PivotTable, target_date: date) -> list[float]:
    """Sorted hotel prices at a date, skipping absent cells and aggregate rows."""
    return sorted(
        price
        for row in table.hotel_rows()
        if (price := row.cells.get(target_date)) is not None
    )


def summarize_pivot(table: PivotTable, target_date: date | None = None) -> StatsSummary:
    """Mean, median, min, max and count over hotel prices at one date.

    Defaults to the last date of the table. The median is the element at
    index ``n // 2`` of the sorted prices (the upper middle for even counts),
    not the average of the two middle values.
    """
    target_date = target_date or table.last_date
    if target_date is None:
        return StatsSummary()

    values = prices_for_date(table, target_date)
    if not values:
        return StatsSummary(date=target_date)

    return StatsSummary(
        date=target_date,
        mean=round_half_up(sum(values) / len(values)),
        median=values[len(values) // 2],
        min=values[0],
        max=values[-1],
        count=len(values),
    )


def summarize_observations(
    observations: Sequence[PriceObservation],
    target_date: date | None = None,
) -> ObservationStats:
    """Avg/min/max over raw observation prices on one date.

    Every observation counts, including several sources for the same hotel.
    When nothing was observed on the target date the figures fall back to
    all observations.
    """
    if not observations:
        return ObservationStats()

    hotels = list(dict.fromkeys(obs.hotel_name for obs in observations))
    dates = sorted({obs.date for obs in observations})
    target_date = target_date or dates[-1]

    prices = [obs.room_price for obs in observations if obs.date == target_date]
    if not prices:
        prices = [obs.room_price for obs in observations]

    return ObservationStats(
        hotels=hotels,
        hotel_count=len(hotels),
        date_count=len(dates),
        avg_price=round_half_up(sum(prices) / len(prices)),
        min_price=min(prices),
        max_price=max(prices),
        last_date=target_date,
    )


def compute_stats(
    mode: StatsMode,
    table: PivotTable,
    observations: Sequence[PriceObservation],
    target_date: date | None = None,
) -> StatsSummary | ObservationStats:
    if mode == StatsMode.observations:
        return summarize_observations(observations, target_date)
    return summarize_pivot(table, target_date)
