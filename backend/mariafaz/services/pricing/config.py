"""Pricing engine configuration — single source for factor tables and thresholds."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DayOfWeekFactors:
    """Weekday multipliers keyed by date.weekday() (Monday=0)."""
    by_weekday: dict[int, float] = field(default_factory=lambda: {
        4: 1.15,   # Friday
        5: 1.25,   # Saturday
        6: 1.10,   # Sunday
    })
    weekend_days: frozenset[int] = frozenset({4, 5, 6})

    def get(self, weekday: int) -> float:
        return self.by_weekday.get(weekday, 1.0)


@dataclass(frozen=True)
class EventImpact:
    """Maps the strongest event's impact score (1-10) onto a multiplier."""
    max_score: float = 10.0
    max_uplift: float = 0.45     # impact 10 -> +45%


@dataclass(frozen=True)
class CompetitorThresholds:
    """ARI bands. Strict comparisons: 1.2 and 0.8 are neutral."""
    overpriced_ari: float = 1.2
    underpriced_ari: float = 0.8
    overpriced_factor: float = 0.95
    underpriced_factor: float = 1.10


@dataclass(frozen=True)
class OccupancyThresholds:
    """Rolling-average occupancy bands."""
    window_days: int = 7
    very_high: float = 0.85
    high: float = 0.70
    low: float = 0.40
    very_high_factor: float = 1.15
    high_factor: float = 1.05
    low_factor: float = 0.90


@dataclass(frozen=True)
class LeadTimeThresholds:
    """Days between today and the stay date."""
    last_minute_days: int = 3
    short_notice_days: int = 7
    early_bird_days: int = 90
    last_minute_factor: float = 0.85
    short_notice_factor: float = 0.92
    early_bird_factor: float = 0.95


@dataclass(frozen=True)
class SummaryWindow:
    """Forward window used by the pricing summary."""
    days: int = 30


# ─── Global config instance ───

DAY_OF_WEEK = DayOfWeekFactors()
EVENT_IMPACT = EventImpact()
COMPETITOR = CompetitorThresholds()
OCCUPANCY = OccupancyThresholds()
LEAD_TIME = LeadTimeThresholds()
SUMMARY = SummaryWindow()

NEUTRAL_FACTOR = 1.0
