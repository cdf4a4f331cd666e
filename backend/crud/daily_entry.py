from typing import List, Optional
from sqlalchemy.orm import Session
from models.daily_entry import DailyEntry
from schemas.daily_entry import DailyEntryCreate
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict


def get_entries_for_batch(db: Session, batch_id: int, tenant_id: str) -> List[DailyEntry]:
    """Daily entries for a batch, most recent first."""
    return db.query(DailyEntry).filter(
        DailyEntry.batch_id == batch_id,
        DailyEntry.tenant_id == tenant_id,
    ).order_by(DailyEntry.date.desc()).all()


def get_entry_for_date(db: Session, batch_id: int, entry_date, tenant_id: str) -> Optional[DailyEntry]:
    return db.query(DailyEntry).filter(
        DailyEntry.batch_id == batch_id,
        DailyEntry.date == entry_date,
        DailyEntry.tenant_id == tenant_id,
    ).first()


def create_daily_entry(db: Session, batch_id: int, entry: DailyEntryCreate, tenant_id: str, changed_by: Optional[str] = None):
    db_entry = DailyEntry(
        **entry.model_dump(),
        batch_id=batch_id,
        tenant_id=tenant_id,
        created_by=changed_by,
        updated_by=changed_by,
    )
    db.add(db_entry)
    db.flush()
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=tenant_id,
        table_name='daily_entry',
        record_id=db_entry.id,
        changed_by=changed_by or 'system',
        action='INSERT',
        new_values=sqlalchemy_to_dict(db_entry),
    ), commit=False)
    db.commit()
    db.refresh(db_entry)
    return db_entry
