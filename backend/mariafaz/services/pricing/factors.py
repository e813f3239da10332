"""Factor resolvers — one pure function per pricing factor.

Each resolver returns ``None`` when its backing data is unavailable. The
composer maps ``None`` to the neutral factor, so "no data" and "data in the
neutral band" stay distinguishable until composition.
"""

from dataclasses import dataclass
from datetime import date

from mariafaz.services.pricing.config import (
    COMPETITOR,
    DAY_OF_WEEK,
    EVENT_IMPACT,
    LEAD_TIME,
    OCCUPANCY,
)


@dataclass(frozen=True)
class SeasonalityRecord:
    market_id: str
    month: int
    factor: float
    weekend_premium: float | None = None


@dataclass(frozen=True)
class EventRecord:
    market_id: str
    name: str
    event_type: str
    start_date: date
    end_date: date
    impact_score: int

    def to_summary(self) -> dict:
        return {
            "name": self.name,
            "event_type": self.event_type,
            "impact_score": self.impact_score,
        }


def is_weekend(target_date: date) -> bool:
    """Friday, Saturday and Sunday nights count as weekend."""
    return target_date.weekday() in DAY_OF_WEEK.weekend_days


def resolve_day_of_week(target_date: date, seasonality: SeasonalityRecord | None = None) -> float:
    """Weekday multiplier, raised (never lowered) by the market's weekend premium."""
    factor = DAY_OF_WEEK.get(target_date.weekday())
    if seasonality is not None and is_weekend(target_date):
        premium = seasonality.weekend_premium or 0.0
        factor = max(factor, 1 + premium)
    return factor


def resolve_seasonality(seasonality: SeasonalityRecord | None) -> float | None:
    if seasonality is None:
        return None
    return seasonality.factor


def match_events(events: list[EventRecord], target_date: date, market_id: str) -> list[EventRecord]:
    """Events running on target_date in this market or flagged for all markets."""
    market = market_id.lower()
    return [
        e for e in events
        if e.start_date <= target_date <= e.end_date
        and (e.market_id == "all" or (e.market_id or "").lower() == market)
    ]


def resolve_event(
    events: list[EventRecord] | None, target_date: date, market_id: str
) -> tuple[float | None, list[dict]]:
    """Factor from the strongest matching event, plus every match as a summary.

    Overlapping events do not stack: only the highest impact score counts.
    """
    if not events:
        return None, []

    matching = match_events(events, target_date, market_id)
    if not matching:
        return None, []

    max_impact = max(e.impact_score or 0 for e in matching)
    factor = 1 + (max_impact / EVENT_IMPACT.max_score) * EVENT_IMPACT.max_uplift
    return factor, [e.to_summary() for e in matching]


def resolve_competitor(ari: float | None) -> float | None:
    # A zero ARI is a placeholder row, not a measurement
    if not ari:
        return None
    if ari > COMPETITOR.overpriced_ari:
        return COMPETITOR.overpriced_factor
    if ari < COMPETITOR.underpriced_ari:
        return COMPETITOR.underpriced_factor
    return 1.0


def average_occupancy(rates: list[float | None]) -> float:
    """Mean over all rows; a null rate counts as 0."""
    return sum(r or 0.0 for r in rates) / len(rates)


def resolve_occupancy(rates: list[float | None] | None) -> float | None:
    if not rates:
        return None
    avg = average_occupancy(rates)
    if avg > OCCUPANCY.very_high:
        return OCCUPANCY.very_high_factor
    if avg > OCCUPANCY.high:
        return OCCUPANCY.high_factor
    if avg < OCCUPANCY.low:
        return OCCUPANCY.low_factor
    return 1.0


def days_until(target_date: date, today: date) -> int:
    return (target_date - today).days


def resolve_lead_time(days: int) -> float:
    if days <= LEAD_TIME.last_minute_days:
        return LEAD_TIME.last_minute_factor
    if days <= LEAD_TIME.short_notice_days:
        return LEAD_TIME.short_notice_factor
    if days > LEAD_TIME.early_bird_days:
        return LEAD_TIME.early_bird_factor
    return 1.0
