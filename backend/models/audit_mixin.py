from sqlalchemy import Column, DateTime, String
from datetime import datetime
import pytz


def now_ist():
    return datetime.now(pytz.timezone('Asia/Kolkata'))


class TimestampMixin:
    """Mixin that provides created/updated timestamps and the acting user.

    Batches, daily entries and ledger rows are hard-deleted, so there are no
    soft-delete columns here. Deletions are still traceable through the audit log.
    """
    # DateTime(timezone=True) keeps the Asia/Kolkata offset on the stored value.
    created_at = Column(DateTime(timezone=True), default=now_ist)
    updated_at = Column(DateTime(timezone=True), onupdate=now_ist)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
