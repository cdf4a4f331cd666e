from sqlalchemy import Column, Integer, String, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from database import Base
from models.audit_mixin import TimestampMixin
import pytz


class Batch(Base, TimestampMixin):
    __tablename__ = "batch"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True)
    farmer_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    start_date = Column(Date, default=lambda: datetime.now(pytz.timezone('Asia/Kolkata')).date())
    initial_bird_count = Column(Integer, nullable=False, default=0)

    daily_entries = relationship(
        "DailyEntry",
        back_populates="batch",
        cascade="all, delete-orphan",
        order_by="DailyEntry.date.desc()",
    )

    __table_args__ = (
        UniqueConstraint('tenant_id', 'farmer_id', 'name', name='_tenant_farmer_batch_name_uc'),
    )
