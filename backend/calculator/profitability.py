"""
Batch profitability: revenue and cost of goods from the ledger, FCR and
mortality from the daily entries.

This FCR differs from the calculator's: feed consumed over weight actually sold.
"""

from decimal import Decimal
from typing import Dict, Sequence
from calculator.aggregators import aggregate_daily_entries, aggregate_sales, is_sale
from schemas.reports import BatchProfitabilityReport, CostBreakdownItem


def build_profitability_report(batch, entries: Sequence, transactions: Sequence) -> BatchProfitabilityReport:
    revenue = abs(sum((Decimal(str(t.amount)) for t in transactions if is_sale(t)), Decimal(0)))
    cogs = Decimal(0)
    breakdown: Dict[str, Decimal] = {}
    for t in transactions:
        if t.cost_of_goods_sold:
            cogs += Decimal(str(t.cost_of_goods_sold))
            name = t.inventory_item_name or "Uncategorized"
            breakdown[name] = breakdown.get(name, Decimal(0)) + Decimal(str(t.cost_of_goods_sold))

    entry_totals = aggregate_daily_entries(entries)
    sales = aggregate_sales(transactions)

    initial = batch.initial_bird_count
    mortality_rate = entry_totals.total_mortality / initial * 100 if initial > 0 else 0
    fcr = entry_totals.total_feed_consumed_in_kg / sales.total_weight_sold if sales.total_weight_sold > 0 else 0

    return BatchProfitabilityReport(
        batch_id=batch.id,
        batch_name=batch.name,
        start_date=batch.start_date,
        revenue=revenue,
        cogs=cogs,
        profit=revenue - cogs,
        fcr=fcr,
        mortality_rate=mortality_rate,
        total_feed_consumed_in_kg=entry_totals.total_feed_consumed_in_kg,
        total_weight_sold=sales.total_weight_sold,
        cost_breakdown=[CostBreakdownItem(name=name, value=value) for name, value in breakdown.items()],
    )
