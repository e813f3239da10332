"""Dynamic pricing engine — factor model for nightly rate recommendations.

Modules:
    config        Factor tables and thresholds
    factors       One pure resolver per factor (None = no data)
    composer      Neutral defaults, multiplication, rounding, % change
    data_access   Concurrent reads of seasonality, events, ARI, occupancy
    persister     Upsert of the recommendation keyed by (property, date)

Pipeline:
    PricingDataAdapter.fetch_signals → resolve_* → PricingFactors.resolve
    → compose → upsert_recommendation
"""
