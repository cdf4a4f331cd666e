from decimal import Decimal, ROUND_HALF_UP
from schemas.calculator import CalculationResult, FormattedCalculationResult


def format_indian_currency(amount) -> str:
    if amount is None:
        return "₹ 0.00"
    amount = Decimal(str(amount))
    if not amount.is_finite():
        return f"₹ {amount}"
    amount = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer_part, decimal_part = f"{abs(amount):.2f}".split(".")

    if len(integer_part) <= 3:
        return f"₹ {sign}{integer_part}.{decimal_part}"

    # Indian grouping: last three digits, then pairs (12,34,567.00)
    last_three = integer_part[-3:]
    remaining = integer_part[:-3]

    formatted_remaining = ""
    while len(remaining) > 2:
        formatted_remaining = "," + remaining[-2:] + formatted_remaining
        remaining = remaining[:-2]

    formatted_remaining = remaining + formatted_remaining

    return f"₹ {sign}{formatted_remaining},{last_three}.{decimal_part}"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def format_calculation_result(result: CalculationResult) -> FormattedCalculationResult:
    return FormattedCalculationResult(
        mortality_rate=format_percentage(result.mortality_rate),
        total_feed_cost=format_indian_currency(result.total_feed_cost),
        feed_conversion_ratio=f"{result.feed_conversion_ratio:.2f}",
        cost_per_kg_of_chicken=format_indian_currency(result.cost_per_kg_of_chicken),
    )
