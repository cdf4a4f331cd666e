"""
Calculator front-end adapter.

Binds either manual input or a batch selection to the metrics engine:

- parse_calculation_inputs is the validation boundary. Nothing reaches the
  engine unless every field is a finite, non-negative number.
- derive_autofill_inputs / load_autofill_inputs turn a batch's daily entries and
  transactions into calculator fields (auto-fill mode).
- CalculatorForm holds one session's form state and only lets the most recently
  selected batch update it.
"""

import logging
import math
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import crud.daily_entry as crud_daily_entry
import crud.transactions as crud_transactions
from calculator.aggregators import aggregate_daily_entries, aggregate_sales
from calculator.engine import calculate_batch_metrics, FEED_BAG_WEIGHT_KG
from schemas.calculator import (
    AutoFillInputs,
    CalculationInputs,
    CalculationRequest,
    CalculationResult,
)

logger = logging.getLogger(__name__)

CALCULATOR_FIELDS = (
    "initial_chick_count",
    "final_chick_count",
    "feed_cost_per_bag",
    "bags_of_feed_used",
    "average_chick_weight",
)

INVALID_INPUT_MESSAGE = "Please enter a valid, non-negative number for all fields."
OVERFLOW_MESSAGE = "The values entered are too large to calculate."


class CalculationInputError(ValueError):
    def __init__(self, message: str = INVALID_INPUT_MESSAGE, fields: Sequence[str] = ()):
        super().__init__(message)
        self.message = message
        self.fields = list(fields)


def parse_calculation_inputs(raw: Mapping[str, Any]) -> CalculationInputs:
    """
    Validates raw calculator fields (numbers or numeric strings).

    Raises CalculationInputError naming the offending fields when a value is
    missing, not a number, not finite, or negative.
    """
    values = {}
    for name in CALCULATOR_FIELDS:
        value = raw.get(name)
        if isinstance(value, str):
            value = value.strip()
        values[name] = value

    try:
        request = CalculationRequest.model_validate(values)
    except ValidationError as e:
        fields = sorted({str(error["loc"][0]) for error in e.errors() if error.get("loc")})
        raise CalculationInputError(fields=fields) from e
    return request.to_inputs()


def calculate_checked(inputs: CalculationInputs) -> CalculationResult:
    """
    Runs the engine on validated inputs and rejects results that overflowed.

    Finite inputs can still multiply or divide past the float range; such a
    result has no number to show, so it is reported like an input error.
    """
    result = calculate_batch_metrics(inputs)
    overflowed = [name for name, value in result.model_dump().items() if not math.isfinite(value)]
    if overflowed:
        raise CalculationInputError(message=OVERFLOW_MESSAGE, fields=overflowed)
    return result


def _round2(value: float) -> float:
    # Half-up rounding to 2 decimals
    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


def derive_autofill_inputs(batch, entries: Sequence, transactions: Sequence) -> AutoFillInputs:
    """
    Derives calculator fields from a batch and its records.

    entries must be most-recent-first. feed_cost_per_bag is never derived.
    """
    entry_totals = aggregate_daily_entries(entries)
    sales = aggregate_sales(transactions)

    initial = batch.initial_bird_count
    final = initial - entry_totals.total_mortality - sales.birds_sold
    bags = _round2(entry_totals.total_feed_consumed_in_kg / FEED_BAG_WEIGHT_KG)
    average_weight_kg = _round2(entry_totals.latest_average_weight_in_grams / 1000)

    return AutoFillInputs.model_construct(
        batch_id=batch.id,
        initial_chick_count=initial,
        final_chick_count=final,
        bags_of_feed_used=bags,
        average_chick_weight=average_weight_kg,
        entries=entry_totals,
        sales=sales,
    )


def load_autofill_inputs(db: Session, batch, tenant_id: str) -> AutoFillInputs:
    """
    Reads the batch's entries and transactions and derives the auto-fill fields.

    A failed read is logged and treated as an empty record set, so the caller
    gets zero aggregates instead of an error.
    """
    try:
        entries = crud_daily_entry.get_entries_for_batch(db, batch_id=batch.id, tenant_id=tenant_id)
    except SQLAlchemyError:
        logger.exception("Failed to load daily entries for batch_id=%s; using no entries", batch.id)
        db.rollback()
        entries = []

    try:
        transactions = crud_transactions.get_transactions_for_batch(db, batch_id=batch.id, tenant_id=tenant_id)
    except SQLAlchemyError:
        logger.exception("Failed to load transactions for batch_id=%s; using no transactions", batch.id)
        db.rollback()
        transactions = []

    return derive_autofill_inputs(batch, entries, transactions)


class CalculatorForm:
    """
    Form state for one calculator session.

    Every batch selection is stamped with a sequence number. An auto-fill result
    is applied only if no newer selection was made while it was loading, so a
    slow read for an old batch cannot overwrite the fields of the current one.
    """

    def __init__(self):
        self.fields: Dict[str, Any] = {name: "" for name in CALCULATOR_FIELDS}
        self.selected_batch_id: Optional[int] = None
        self.result: Optional[CalculationResult] = None
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    def set_field(self, name: str, value: Any):
        if name not in self.fields:
            raise KeyError(f"Unknown calculator field: {name}")
        self.fields[name] = value

    def begin_selection(self, batch_id: int) -> int:
        self._sequence += 1
        self.selected_batch_id = batch_id
        return self._sequence

    def apply_autofill(self, sequence: int, autofill: AutoFillInputs) -> bool:
        if sequence != self._sequence:
            logger.info(
                "Discarding stale auto-fill for batch_id=%s (sequence %d, latest %d)",
                autofill.batch_id, sequence, self._sequence,
            )
            return False
        self.fields["initial_chick_count"] = autofill.initial_chick_count
        self.fields["final_chick_count"] = autofill.final_chick_count
        self.fields["bags_of_feed_used"] = autofill.bags_of_feed_used
        self.fields["average_chick_weight"] = autofill.average_chick_weight
        return True

    async def select_batch(self, batch_id: int, loader: Callable[[int], Awaitable[AutoFillInputs]]) -> bool:
        """Selects a batch and auto-fills from it. Returns False if the result was stale."""
        sequence = self.begin_selection(batch_id)
        autofill = await loader(batch_id)
        return self.apply_autofill(sequence, autofill)

    def submit(self) -> CalculationResult:
        inputs = parse_calculation_inputs(self.fields)
        self.result = calculate_checked(inputs)
        return self.result

    def reset(self):
        self.fields = {name: "" for name in CALCULATOR_FIELDS}
        self.selected_batch_id = None
        self.result = None
        # Bump the sequence so loads still in flight are dropped
        self._sequence += 1
