from pydantic import BaseModel, Field, field_validator
from typing import Optional


class CalculationInputs(BaseModel):
    """Inputs to the batch metrics engine.

    No range checks here: the engine accepts anything numeric. Non-negativity is
    enforced by CalculationRequest before a CalculationInputs is built.
    """
    initial_chick_count: float
    final_chick_count: float
    feed_cost_per_bag: float
    bags_of_feed_used: float
    average_chick_weight: float  # kg


class CalculationResult(BaseModel):
    mortality_rate: float  # percentage
    total_feed_cost: float
    feed_conversion_ratio: float
    cost_per_kg_of_chicken: float


class CalculationRequest(BaseModel):
    initial_chick_count: float = Field(ge=0, allow_inf_nan=False)
    final_chick_count: float = Field(ge=0, allow_inf_nan=False)
    feed_cost_per_bag: float = Field(ge=0, allow_inf_nan=False)
    bags_of_feed_used: float = Field(ge=0, allow_inf_nan=False)
    average_chick_weight: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        # true/false are not numbers, even though float() accepts them
        if isinstance(v, bool):
            raise ValueError("must be a number")
        return v

    def to_inputs(self) -> CalculationInputs:
        # Counts are whole birds; fractional input is truncated
        return CalculationInputs(
            initial_chick_count=int(self.initial_chick_count),
            final_chick_count=int(self.final_chick_count),
            feed_cost_per_bag=self.feed_cost_per_bag,
            bags_of_feed_used=self.bags_of_feed_used,
            average_chick_weight=self.average_chick_weight,
        )


class FormattedCalculationResult(BaseModel):
    mortality_rate: str
    total_feed_cost: str
    feed_conversion_ratio: str
    cost_per_kg_of_chicken: str


class CalculationResponse(BaseModel):
    inputs: CalculationInputs
    result: CalculationResult
    formatted: FormattedCalculationResult
    batch_id: Optional[int] = None


class DailyEntryTotals(BaseModel):
    total_mortality: int = 0
    total_feed_consumed_in_kg: float = 0
    latest_average_weight_in_grams: float = 0


class SalesTotals(BaseModel):
    birds_sold: int = 0
    total_weight_sold: float = 0


class AutoFillInputs(BaseModel):
    """Calculator fields derived from a batch's records.

    feed_cost_per_bag is absent: it lives in a different ledger and stays user-entered.
    """
    batch_id: int
    initial_chick_count: int
    final_chick_count: int
    bags_of_feed_used: float
    average_chick_weight: float
    entries: DailyEntryTotals
    sales: SalesTotals


class AutoFillResponse(AutoFillInputs):
    sequence: Optional[int] = None


class BatchCalculationRequest(BaseModel):
    feed_cost_per_bag: float = Field(ge=0, allow_inf_nan=False)
