import pytest
from calculator import calculate_batch_metrics, FEED_BAG_WEIGHT_KG
from schemas.calculator import CalculationInputs


def make_inputs(**overrides):
    values = dict(
        initial_chick_count=1000,
        final_chick_count=950,
        feed_cost_per_bag=1200,
        bags_of_feed_used=40,
        average_chick_weight=2.0,
    )
    values.update(overrides)
    return CalculationInputs(**values)


def test_manual_scenario():
    result = calculate_batch_metrics(make_inputs())

    assert result.mortality_rate == pytest.approx(5.0)
    assert result.total_feed_cost == 48000
    assert result.feed_conversion_ratio == pytest.approx(40 * 50 / (950 * 2.0))
    assert result.feed_conversion_ratio == pytest.approx(1.0526315789)
    assert result.cost_per_kg_of_chicken == pytest.approx(48000 / 1900)


def test_degenerate_scenario():
    result = calculate_batch_metrics(make_inputs(
        initial_chick_count=0,
        final_chick_count=0,
        feed_cost_per_bag=500,
        bags_of_feed_used=10,
        average_chick_weight=0,
    ))

    assert result.mortality_rate == 0
    assert result.total_feed_cost == 5000
    assert result.feed_conversion_ratio == 0
    assert result.cost_per_kg_of_chicken == 0


@pytest.mark.parametrize("final_count", [0, 10, 5000])
def test_zero_initial_count_gives_zero_mortality(final_count):
    result = calculate_batch_metrics(make_inputs(initial_chick_count=0, final_chick_count=final_count))
    assert result.mortality_rate == 0


@pytest.mark.parametrize("final_count,weight", [(0, 2.0), (950, 0), (0, 0)])
def test_zero_weight_gain_saturates_ratios(final_count, weight):
    result = calculate_batch_metrics(make_inputs(final_chick_count=final_count, average_chick_weight=weight))
    assert result.feed_conversion_ratio == 0
    assert result.cost_per_kg_of_chicken == 0


def test_feed_cost_is_plain_product():
    result = calculate_batch_metrics(make_inputs(feed_cost_per_bag=1234.56, bags_of_feed_used=7.25))
    assert result.total_feed_cost == 1234.56 * 7.25


def test_feed_conversion_uses_fifty_kg_bags():
    assert FEED_BAG_WEIGHT_KG == 50
    # Total weight of 100 kg makes the FCR equal to the feed used in kg / 100
    result = calculate_batch_metrics(make_inputs(final_chick_count=100, average_chick_weight=1, bags_of_feed_used=3))
    assert result.feed_conversion_ratio == 3 * 50 / 100


def test_more_birds_than_started_gives_negative_mortality():
    result = calculate_batch_metrics(make_inputs(initial_chick_count=100, final_chick_count=120))
    assert result.mortality_rate == pytest.approx(-20.0)
