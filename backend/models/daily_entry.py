from sqlalchemy import Column, Integer, String, Date, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class DailyEntry(Base, TimestampMixin):
    __tablename__ = "daily_entry"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True)
    batch_id = Column(Integer, ForeignKey("batch.id", ondelete="CASCADE"), index=True, nullable=False)
    batch = relationship("Batch", back_populates="daily_entries")
    date = Column(Date, nullable=False)
    mortality = Column(Integer, default=0, nullable=False)
    feed_consumed_in_kg = Column(Float, default=0, nullable=False)
    average_weight_in_grams = Column(Float, default=0, nullable=False)
    notes = Column(String, nullable=True)

    __table_args__ = (
        # One record per day per batch
        UniqueConstraint('batch_id', 'date', name='_batch_date_uc'),
    )
