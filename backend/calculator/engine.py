"""
Batch metrics engine.

Turns a set of calculator inputs into mortality rate, total feed cost, feed
conversion ratio (FCR) and feed cost per kg of chicken.

FCR here is total feed (kg) over final_chick_count * average_chick_weight, not
live-weight gain per bird over the period. Stored reports depend on this exact
definition, so keep it.
"""

from schemas.calculator import CalculationInputs, CalculationResult

# One bag of feed, in kg
FEED_BAG_WEIGHT_KG = 50


def calculate_batch_metrics(inputs: CalculationInputs) -> CalculationResult:
    """
    Computes the batch performance metrics for the given inputs.

    Never raises. A zero initial count gives a 0 mortality rate and a zero total
    weight gives 0 for both FCR and cost per kg. Inputs are not range checked, so
    final_chick_count > initial_chick_count yields a negative mortality rate.
    """
    initial = inputs.initial_chick_count
    final = inputs.final_chick_count

    mortality_rate = (initial - final) / initial * 100 if initial > 0 else 0

    total_feed_cost = inputs.feed_cost_per_bag * inputs.bags_of_feed_used
    total_weight_gain = final * inputs.average_chick_weight
    total_feed_used_in_kg = inputs.bags_of_feed_used * FEED_BAG_WEIGHT_KG

    feed_conversion_ratio = total_feed_used_in_kg / total_weight_gain if total_weight_gain > 0 else 0
    cost_per_kg_of_chicken = total_feed_cost / total_weight_gain if total_weight_gain > 0 else 0

    return CalculationResult(
        mortality_rate=mortality_rate,
        total_feed_cost=total_feed_cost,
        feed_conversion_ratio=feed_conversion_ratio,
        cost_per_kg_of_chicken=cost_per_kg_of_chicken,
    )
