from mariafaz.models.market import MarketEvent, Seasonality
from mariafaz.models.pricing import PricingRecommendation
from mariafaz.models.property import KpiCompSetDaily, KpiDaily, Property

__all__ = [
    "KpiCompSetDaily",
    "KpiDaily",
    "MarketEvent",
    "PricingRecommendation",
    "Property",
    "Seasonality",
]
