import pytest

from mariafaz.services.pricing.composer import PricingFactors, compose, round_price

FACTOR_NAMES = ("day_of_week", "seasonality", "event", "competitor", "occupancy", "lead_time")


def test_resolve_maps_missing_factors_to_neutral():
    factors = PricingFactors.resolve(day_of_week=1.25)
    assert factors.to_dict() == {
        "day_of_week_factor": 1.25,
        "seasonality_factor": 1.0,
        "event_factor": 1.0,
        "competitor_factor": 1.0,
        "occupancy_factor": 1.0,
        "lead_time_factor": 1.0,
    }


def test_compose_multiplies_all_factors():
    factors = PricingFactors.resolve(
        day_of_week=1.3,
        seasonality=1.1,
        event=None,
        competitor=1.10,
        occupancy=1.15,
        lead_time=0.92,
    )
    quote = compose(100, factors)

    # 100 * 1.3 * 1.1 * 1.0 * 1.10 * 1.15 * 0.92 = 166.42
    assert quote.suggested_price == 166
    assert quote.price_change_percent == "66.0"


def test_compose_neutral_factors_keep_base_price():
    quote = compose(120, PricingFactors())
    assert quote.suggested_price == 120
    assert quote.price_change_percent == "0.0"


def test_compose_reports_discounts_as_negative_change():
    quote = compose(100, PricingFactors.resolve(lead_time=0.85))
    assert quote.suggested_price == 85
    assert quote.price_change_percent == "-15.0"


def test_round_price_rounds_halves_up():
    assert round_price(100.5) == 101
    assert round_price(101.5) == 102
    assert round_price(99.49) == 99


@pytest.mark.parametrize("name", FACTOR_NAMES)
def test_raising_any_single_factor_never_lowers_price(name):
    baseline = dict(
        day_of_week=1.15, seasonality=0.9, event=1.2, competitor=0.95, occupancy=1.05, lead_time=0.92
    )
    prices = [
        compose(87.5, PricingFactors.resolve(**{**baseline, name: value})).suggested_price
        for value in (0.85, 0.95, 1.0, 1.05, 1.2, 1.5, 2.0)
    ]
    assert prices == sorted(prices)


@pytest.mark.parametrize("base_price", [1, 9.99, 55, 250, 1000])
def test_positive_inputs_give_positive_integer_price(base_price):
    factors = PricingFactors.resolve(
        day_of_week=1.0, seasonality=0.8, event=None, competitor=0.95, occupancy=0.9, lead_time=0.85
    )
    quote = compose(base_price, factors)
    assert isinstance(quote.suggested_price, int)
    assert quote.suggested_price > 0
