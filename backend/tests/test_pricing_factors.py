from datetime import date

import pytest

from mariafaz.services.pricing.factors import (
    EventRecord,
    SeasonalityRecord,
    average_occupancy,
    days_until,
    resolve_competitor,
    resolve_day_of_week,
    resolve_event,
    resolve_lead_time,
    resolve_occupancy,
    resolve_seasonality,
)

MONDAY = date(2026, 10, 19)
FRIDAY = date(2026, 10, 23)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)


def _event(name, impact, market_id="sintra", start=SATURDAY, end=SATURDAY, event_type="festival"):
    return EventRecord(
        market_id=market_id,
        name=name,
        event_type=event_type,
        start_date=start,
        end_date=end,
        impact_score=impact,
    )


# ─── Day of week ───


@pytest.mark.parametrize(
    "day, expected",
    [
        (MONDAY, 1.0),
        (date(2026, 10, 22), 1.0),  # Thursday
        (FRIDAY, 1.15),
        (SATURDAY, 1.25),
        (SUNDAY, 1.10),
    ],
)
def test_day_of_week_table(day, expected):
    assert resolve_day_of_week(day) == pytest.approx(expected)


def test_weekend_premium_raises_weekend_factor():
    season = SeasonalityRecord(market_id="sintra", month=10, factor=1.1, weekend_premium=0.3)
    assert resolve_day_of_week(SATURDAY, season) == pytest.approx(1.3)
    assert resolve_day_of_week(SUNDAY, season) == pytest.approx(1.3)


def test_weekend_premium_never_lowers_weekend_factor():
    season = SeasonalityRecord(market_id="sintra", month=10, factor=1.1, weekend_premium=0.05)
    assert resolve_day_of_week(SATURDAY, season) == pytest.approx(1.25)


def test_weekend_premium_ignored_on_weekdays():
    season = SeasonalityRecord(market_id="sintra", month=10, factor=1.1, weekend_premium=0.5)
    assert resolve_day_of_week(MONDAY, season) == 1.0


def test_missing_weekend_premium_keeps_table_value():
    season = SeasonalityRecord(market_id="sintra", month=10, factor=1.1, weekend_premium=None)
    assert resolve_day_of_week(FRIDAY, season) == pytest.approx(1.15)


# ─── Seasonality ───


def test_seasonality_passes_factor_through():
    season = SeasonalityRecord(market_id="algarve", month=8, factor=1.7)
    assert resolve_seasonality(season) == pytest.approx(1.7)


def test_seasonality_missing_record_is_no_data():
    assert resolve_seasonality(None) is None


# ─── Events ───


def test_event_factor_uses_highest_impact_and_lists_all_matches():
    events = [_event("Feira", 3), _event("Festival de Sintra", 8)]
    factor, relevant = resolve_event(events, SATURDAY, "sintra")

    assert factor == pytest.approx(1.36)
    assert {e["name"] for e in relevant} == {"Feira", "Festival de Sintra"}
    assert relevant[0] == {"name": "Feira", "event_type": "festival", "impact_score": 3}


def test_event_factor_range_endpoints():
    low, _ = resolve_event([_event("Small", 1)], SATURDAY, "sintra")
    high, _ = resolve_event([_event("Huge", 10)], SATURDAY, "sintra")
    assert low == pytest.approx(1.045)
    assert high == pytest.approx(1.45)


def test_event_market_match_is_case_insensitive_and_accepts_all():
    events = [
        _event("Local", 4, market_id="Sintra"),
        _event("National holiday", 6, market_id="all"),
        _event("Elsewhere", 9, market_id="porto"),
    ]
    factor, relevant = resolve_event(events, SATURDAY, "sintra")

    assert factor == pytest.approx(1 + 0.6 * 0.45)
    assert [e["name"] for e in relevant] == ["Local", "National holiday"]


def test_event_outside_date_range_does_not_match():
    events = [_event("Last week", 9, start=date(2026, 10, 10), end=date(2026, 10, 12))]
    assert resolve_event(events, SATURDAY, "sintra") == (None, [])


def test_event_boundaries_are_inclusive():
    events = [_event("Weekend fair", 5, start=FRIDAY, end=SATURDAY)]
    factor, _ = resolve_event(events, SATURDAY, "sintra")
    assert factor == pytest.approx(1.225)


def test_no_events_is_no_data():
    assert resolve_event([], SATURDAY, "sintra") == (None, [])
    assert resolve_event(None, SATURDAY, "sintra") == (None, [])


# ─── Competitor ───


@pytest.mark.parametrize(
    "ari, expected",
    [
        (1.5, 0.95),
        (1.21, 0.95),
        (1.2, 1.0),   # strict threshold
        (1.0, 1.0),
        (0.8, 1.0),   # strict threshold
        (0.79, 1.10),
        (0.5, 1.10),
    ],
)
def test_competitor_bands(ari, expected):
    assert resolve_competitor(ari) == pytest.approx(expected)


def test_competitor_missing_ari_is_no_data():
    assert resolve_competitor(None) is None
    assert resolve_competitor(0.0) is None


# ─── Occupancy ───


@pytest.mark.parametrize(
    "rates, expected",
    [
        ([0.9] * 7, 1.15),
        ([0.86, 0.86], 1.15),
        ([0.85] * 7, 1.05),   # not strictly above 0.85
        ([0.75] * 3, 1.05),
        ([0.70] * 7, 1.0),    # not strictly above 0.70
        ([0.55] * 7, 1.0),
        ([0.40] * 7, 1.0),    # not strictly below 0.40
        ([0.2, 0.3], 0.90),
    ],
)
def test_occupancy_bands(rates, expected):
    assert resolve_occupancy(rates) == pytest.approx(expected)


def test_occupancy_null_rates_count_as_zero():
    assert average_occupancy([0.9, None]) == pytest.approx(0.45)
    assert resolve_occupancy([0.9, None]) == 1.0


def test_occupancy_order_does_not_matter():
    rates = [0.95, 0.1, 0.8, 0.9, 0.99, 0.7, 0.85]
    assert resolve_occupancy(rates) == resolve_occupancy(list(reversed(rates)))


def test_occupancy_no_rows_is_no_data():
    assert resolve_occupancy([]) is None
    assert resolve_occupancy(None) is None


# ─── Lead time ───


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, 0.85),
        (3, 0.85),
        (4, 0.92),
        (7, 0.92),
        (8, 1.0),
        (90, 1.0),
        (91, 0.95),
    ],
)
def test_lead_time_bands(days, expected):
    assert resolve_lead_time(days) == pytest.approx(expected)


def test_lead_time_past_dates_fall_into_last_minute_band():
    # Only reachable when past dates are explicitly allowed
    assert resolve_lead_time(-5) == pytest.approx(0.85)


def test_days_until():
    assert days_until(SATURDAY, MONDAY) == 5
    assert days_until(MONDAY, MONDAY) == 0
