"""
Reductions over a batch's daily entries and ledger transactions.

Both aggregators accept ORM rows or schema objects, anything exposing the
attribute names below. They never raise: missing optional values count as 0
and malformed numbers flow through into the totals.
"""

from typing import Iterable, Sequence
from models.transactions import TransactionKind
from schemas.calculator import DailyEntryTotals, SalesTotals

# Legacy description markers, used only for rows recorded without a kind
BIRD_SALE_MARKER = "Sale of birds"
SALE_MARKER = "sale"


def aggregate_daily_entries(entries: Sequence) -> DailyEntryTotals:
    """
    Sums mortality and feed over the entries and picks the latest average weight.

    The entries must already be ordered most-recent-first: the first element's
    weight is reported as the latest one. No sorting happens here.
    """
    total_mortality = 0
    total_feed = 0
    for entry in entries:
        total_mortality += entry.mortality
        total_feed += entry.feed_consumed_in_kg

    latest_weight = entries[0].average_weight_in_grams if len(entries) > 0 else 0

    # model_construct skips validation so a malformed value cannot raise here
    return DailyEntryTotals.model_construct(
        total_mortality=total_mortality,
        total_feed_consumed_in_kg=total_feed,
        latest_average_weight_in_grams=latest_weight,
    )


def _kind_of(transaction):
    kind = getattr(transaction, "kind", None)
    if kind is None:
        return None
    if isinstance(kind, TransactionKind):
        return kind
    try:
        return TransactionKind(kind)
    except ValueError:
        # Unknown kinds are classified like legacy rows
        return None


def is_bird_sale(transaction) -> bool:
    """
    Rows of kind sale are bird sales: birds are the only thing a batch sells,
    and log_sale is what records them. Other income belongs under another kind.
    Rows without a kind fall back to the "Sale of birds" description marker.
    """
    kind = _kind_of(transaction)
    if kind is not None:
        return kind == TransactionKind.SALE
    return BIRD_SALE_MARKER in (transaction.description or "")


def is_sale(transaction) -> bool:
    kind = _kind_of(transaction)
    if kind is not None:
        return kind == TransactionKind.SALE
    return SALE_MARKER in (transaction.description or "").lower()


def aggregate_sales(transactions: Iterable) -> SalesTotals:
    birds_sold = 0
    total_weight_sold = 0
    for transaction in transactions:
        if is_bird_sale(transaction):
            birds_sold += transaction.quantity_sold or 0
        if is_sale(transaction):
            total_weight_sold += transaction.total_weight or 0

    return SalesTotals.model_construct(birds_sold=birds_sold, total_weight_sold=total_weight_sold)
