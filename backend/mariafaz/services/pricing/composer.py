"""Price composer — multiplies the base price by every resolved factor."""

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

from mariafaz.services.pricing.config import NEUTRAL_FACTOR


def _or_neutral(factor: float | None) -> float:
    return NEUTRAL_FACTOR if factor is None else factor


@dataclass(frozen=True)
class PricingFactors:
    day_of_week_factor: float = NEUTRAL_FACTOR
    seasonality_factor: float = NEUTRAL_FACTOR
    event_factor: float = NEUTRAL_FACTOR
    competitor_factor: float = NEUTRAL_FACTOR
    occupancy_factor: float = NEUTRAL_FACTOR
    lead_time_factor: float = NEUTRAL_FACTOR

    @classmethod
    def resolve(
        cls,
        day_of_week: float | None = None,
        seasonality: float | None = None,
        event: float | None = None,
        competitor: float | None = None,
        occupancy: float | None = None,
        lead_time: float | None = None,
    ) -> "PricingFactors":
        """Build factors from resolver outputs, treating missing data as neutral."""
        return cls(
            day_of_week_factor=_or_neutral(day_of_week),
            seasonality_factor=_or_neutral(seasonality),
            event_factor=_or_neutral(event),
            competitor_factor=_or_neutral(competitor),
            occupancy_factor=_or_neutral(occupancy),
            lead_time_factor=_or_neutral(lead_time),
        )

    @property
    def combined(self) -> float:
        return (
            self.day_of_week_factor
            * self.seasonality_factor
            * self.event_factor
            * self.competitor_factor
            * self.occupancy_factor
            * self.lead_time_factor
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PriceQuote:
    base_price: float
    suggested_price: int
    price_change_percent: str


def round_price(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compose(base_price: float, factors: PricingFactors) -> PriceQuote:
    suggested = round_price(base_price * factors.combined)
    change = (suggested - base_price) / base_price * 100
    return PriceQuote(
        base_price=base_price,
        suggested_price=suggested,
        price_change_percent=f"{change:.1f}",
    )
