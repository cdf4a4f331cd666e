from datetime import date
from typing import Optional, Sequence
from calculator.aggregators import aggregate_daily_entries, aggregate_sales
from schemas.batch import BatchSummary

# Broiler grow-out cycle, in days
CYCLE_DURATION_DAYS = 42


def summarize_batch(batch, entries: Sequence, transactions: Sequence, as_of: Optional[date] = None) -> BatchSummary:
    """Live bird count, mortality and growth-cycle progress for a batch."""
    as_of = as_of or date.today()
    entry_totals = aggregate_daily_entries(entries)
    sales = aggregate_sales(transactions)

    batch_age = (as_of - batch.start_date).days
    progress = min(batch_age / CYCLE_DURATION_DAYS * 100, 100)

    return BatchSummary(
        batch_id=batch.id,
        name=batch.name,
        start_date=batch.start_date,
        initial_bird_count=batch.initial_bird_count,
        total_mortality=entry_totals.total_mortality,
        birds_sold=sales.birds_sold,
        current_bird_count=batch.initial_bird_count - entry_totals.total_mortality - sales.birds_sold,
        batch_age_days=batch_age,
        cycle_duration_days=CYCLE_DURATION_DAYS,
        growth_cycle_progress=progress,
    )
