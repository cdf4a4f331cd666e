from pydantic import BaseModel
from typing import List
from datetime import date
from decimal import Decimal


class CostBreakdownItem(BaseModel):
    name: str
    value: Decimal


class BatchProfitabilityReport(BaseModel):
    batch_id: int
    batch_name: str
    start_date: date
    revenue: Decimal
    cogs: Decimal
    profit: Decimal
    fcr: float
    mortality_rate: float
    total_feed_consumed_in_kg: float
    total_weight_sold: float
    cost_breakdown: List[CostBreakdownItem] = []
