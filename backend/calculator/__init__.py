from calculator.engine import calculate_batch_metrics, FEED_BAG_WEIGHT_KG
from calculator.aggregators import aggregate_daily_entries, aggregate_sales, is_bird_sale, is_sale
from calculator.adapter import (
    CalculationInputError,
    CalculatorForm,
    calculate_checked,
    derive_autofill_inputs,
    parse_calculation_inputs,
)

__all__ = [
    'CalculationInputError',
    'CalculatorForm',
    'FEED_BAG_WEIGHT_KG',
    'aggregate_daily_entries',
    'aggregate_sales',
    'calculate_batch_metrics',
    'calculate_checked',
    'derive_autofill_inputs',
    'is_bird_sale',
    'is_sale',
    'parse_calculation_inputs',
]
