"""Tests for the pivot and raw-observation statistic conventions."""

from datetime import date

from app.mappers.pivot_builder import build_pivot_table
from app.mappers.stats_summarizer import (
    StatsMode,
    compute_stats,
    prices_for_date,
    summarize_observations,
    summarize_pivot,
)
from app.schemas.pivot import ObservationStats, StatsSummary
from tests.factories import make_obs

D1 = date(2024, 1, 1)
D2 = date(2024, 1, 2)


def _table_for_last_date(prices):
    observations = [make_obs(f"H{i}", "2024-01-02", p) for i, p in enumerate(prices)]
    observations.append(make_obs("H0", "2024-01-01", 999))
    return build_pivot_table(observations)


# --- summarize_pivot ---


def test_median_even_count_takes_upper_middle():
    """[10, 20, 30, 40] → element at index 4 // 2, never the averaged 25."""
    summary = summarize_pivot(_table_for_last_date([40, 10, 30, 20]))

    assert summary.median == 30
    assert summary.median != 25


def test_median_odd_count():
    summary = summarize_pivot(_table_for_last_date([300, 100, 200]))
    assert summary.median == 200


def test_defaults_to_last_date():
    summary = summarize_pivot(_table_for_last_date([100, 200]))

    assert summary.date == D2
    assert summary.count == 2
    assert summary.mean == 150
    assert summary.min == 100
    assert summary.max == 200


def test_aggregate_rows_are_excluded():
    table = _table_for_last_date([100, 300])

    # avg/max/min rows hold 200/300/100; counting them would give 5 values
    assert summarize_pivot(table).count == 2
    assert prices_for_date(table, D2) == [100, 300]


def test_explicit_target_date():
    summary = summarize_pivot(_table_for_last_date([100, 200]), D1)

    assert summary.date == D1
    assert summary.count == 1
    assert summary.median == 999


def test_mean_rounds_half_up():
    summary = summarize_pivot(_table_for_last_date([100, 101]))
    assert summary.mean == 101


def test_no_hotels_priced_is_no_data_not_zero():
    table = build_pivot_table([make_obs("A", "2024-01-01", 100)], hotel_names=["A", "B"])

    summary = summarize_pivot(table, date(2024, 1, 5))

    assert summary.has_data is False
    assert summary.count == 0
    assert summary.mean is None
    assert summary.median is None
    assert summary.min is None
    assert summary.max is None


def test_zero_price_is_real_data():
    table = build_pivot_table([make_obs("A", "2024-01-01", 0)])

    summary = summarize_pivot(table)

    assert summary.has_data is True
    assert summary.min == 0
    assert summary.mean == 0


def test_empty_table():
    summary = summarize_pivot(build_pivot_table([]))

    assert summary == StatsSummary()
    assert summary.date is None


# --- summarize_observations ---


def test_observation_stats_count_every_source():
    observations = [
        make_obs("A", "2024-01-02", 100, site="s1"),
        make_obs("A", "2024-01-02", 80, site="s2"),
        make_obs("B", "2024-01-02", 150),
        make_obs("B", "2024-01-01", 500),
    ]

    stats = summarize_observations(observations)

    assert stats.last_date == D2
    assert stats.hotels == ["A", "B"]
    assert stats.hotel_count == 2
    assert stats.date_count == 2
    assert stats.avg_price == 110
    assert stats.min_price == 80
    assert stats.max_price == 150


def test_observation_stats_fall_back_to_all_prices():
    observations = [
        make_obs("A", "2024-01-01", 100),
        make_obs("B", "2024-01-02", 300),
    ]

    stats = summarize_observations(observations, date(2024, 1, 9))

    assert stats.last_date == date(2024, 1, 9)
    assert stats.avg_price == 200
    assert stats.min_price == 100
    assert stats.max_price == 300


def test_observation_stats_empty():
    stats = summarize_observations([])

    assert stats == ObservationStats()
    assert stats.avg_price is None


# --- compute_stats ---


def test_compute_stats_dispatches_on_mode():
    observations = [make_obs("A", "2024-01-01", 100), make_obs("A", "2024-01-01", 60)]
    table = build_pivot_table(observations)

    pivot = compute_stats(StatsMode.pivot, table, observations)
    raw = compute_stats(StatsMode.observations, table, observations)

    assert isinstance(pivot, StatsSummary)
    assert pivot.mean == 60
    assert isinstance(raw, ObservationStats)
    assert raw.avg_price == 80
