from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict
from models.batch import Batch
from models.daily_entry import DailyEntry
from schemas.batch import BatchCreate, BatchUpdate
import logging

logger = logging.getLogger(__name__)

# Batches a farmer on the free plan may hold at once
FREE_PLAN_BATCH_LIMIT = 1


class BatchLimitExceeded(Exception):
    pass


class DuplicateBatchName(Exception):
    pass


def _flush_batch(db: Session, db_batch: Batch):
    name, farmer_id = db_batch.name, db_batch.farmer_id
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Batch name '%s' already used by farmer %s", name, farmer_id)
        raise DuplicateBatchName("A batch with this name already exists") from e


def get_batch_by_id(db: Session, batch_id: int, tenant_id: str, farmer_id: Optional[str] = None):
    query = db.query(Batch).filter(Batch.id == batch_id, Batch.tenant_id == tenant_id)
    if farmer_id is not None:
        query = query.filter(Batch.farmer_id == farmer_id)
    return query.first()


def get_batches_by_farmer(db: Session, farmer_id: str, tenant_id: str, skip: int = 0, limit: int = 100) -> List[Batch]:
    return db.query(Batch).filter(
        Batch.farmer_id == farmer_id,
        Batch.tenant_id == tenant_id,
    ).order_by(Batch.start_date.desc(), Batch.id.desc()).offset(skip).limit(limit).all()


def count_batches_for_farmer(db: Session, farmer_id: str, tenant_id: str) -> int:
    return db.query(Batch).filter(Batch.farmer_id == farmer_id, Batch.tenant_id == tenant_id).count()


def create_batch(db: Session, batch: BatchCreate, tenant_id: str, farmer_id: str, unlimited: bool = False):
    if not unlimited and count_batches_for_farmer(db, farmer_id, tenant_id) >= FREE_PLAN_BATCH_LIMIT:
        raise BatchLimitExceeded(
            f"Free plan is limited to {FREE_PLAN_BATCH_LIMIT} batch. "
            "Please upgrade to a premium account to create more batches."
        )

    db_batch = Batch(
        **batch.model_dump(),
        tenant_id=tenant_id,
        farmer_id=farmer_id,
        created_by=farmer_id,
        updated_by=farmer_id,
    )
    db.add(db_batch)
    _flush_batch(db, db_batch)
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=tenant_id,
        table_name='batch',
        record_id=db_batch.id,
        changed_by=farmer_id,
        action='INSERT',
        new_values=sqlalchemy_to_dict(db_batch),
    ), commit=False)
    db.commit()
    db.refresh(db_batch)
    return db_batch


def update_batch(db: Session, db_batch: Batch, batch_data: BatchUpdate, changed_by: str):
    old_values = sqlalchemy_to_dict(db_batch)
    for key, value in batch_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(db_batch, key, value)
    db_batch.updated_by = changed_by
    _flush_batch(db, db_batch)
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=db_batch.tenant_id,
        table_name='batch',
        record_id=db_batch.id,
        changed_by=changed_by,
        action='UPDATE',
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_batch),
    ), commit=False)
    db.commit()
    db.refresh(db_batch)
    return db_batch


def delete_batch(db: Session, db_batch: Batch, changed_by: str):
    """Deletes the batch together with its daily entries."""
    old_values = sqlalchemy_to_dict(db_batch)
    batch_id = db_batch.id
    deleted_entries = db.query(DailyEntry).filter(DailyEntry.batch_id == batch_id).delete(synchronize_session=False)
    db.delete(db_batch)
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=db_batch.tenant_id,
        table_name='batch',
        record_id=batch_id,
        changed_by=changed_by,
        action='DELETE',
        old_values=old_values,
    ), commit=False)
    db.commit()
    logger.info("Deleted batch_id=%d and %d daily entries", batch_id, deleted_entries)
    return True
