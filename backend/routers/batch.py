from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.batch import BatchCreate, BatchUpdate, Batch as BatchSchema, BatchSummary
import crud.batch as crud_batch
import crud.daily_entry as crud_daily_entry
import crud.transactions as crud_transactions
from crud.audit_log import get_audit_logs
from calculator.batch_summary import summarize_batch
from utils import today_ist
from utils.auth_utils import RequestContext, get_request_context, require_group

# --- Logging Configuration (import and get logger) ---
import logging
logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/batches",
    tags=["Batches"],
)


def get_owned_batch(db: Session, batch_id: int, context: RequestContext):
    db_batch = crud_batch.get_batch_by_id(db, batch_id=batch_id, tenant_id=context.tenant_id, farmer_id=context.user_id)
    if db_batch is None:
        logger.warning("Batch with batch_id=%d not found for tenant %s", batch_id, context.tenant_id)
        raise HTTPException(status_code=404, detail="Batch not found")
    return db_batch


@router.post("/", response_model=BatchSchema, status_code=201)
def create_batch(
    batch: BatchCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    logger.info("Creating batch '%s' for farmer %s", batch.name, context.user_id)
    try:
        return crud_batch.create_batch(
            db=db, batch=batch, tenant_id=context.tenant_id, farmer_id=context.user_id, unlimited=context.has_unlimited_batches
        )
    except (crud_batch.BatchLimitExceeded, crud_batch.DuplicateBatchName) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", response_model=List[BatchSchema])
def read_batches(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """
    Fetch the caller's batches, newest start date first.
    """
    batches = crud_batch.get_batches_by_farmer(db, farmer_id=context.user_id, tenant_id=context.tenant_id, skip=skip, limit=limit)
    logger.info("Fetched %d batches for farmer %s", len(batches), context.user_id)
    return batches


@router.get("/{batch_id}", response_model=BatchSchema)
def read_batch(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    return get_owned_batch(db, batch_id, context)


@router.get("/{batch_id}/summary", response_model=BatchSummary)
def read_batch_summary(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    db_batch = get_owned_batch(db, batch_id, context)
    entries = crud_daily_entry.get_entries_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)
    transactions = crud_transactions.get_transactions_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)
    return summarize_batch(db_batch, entries, transactions, as_of=today_ist())


@router.patch("/{batch_id}", response_model=BatchSchema)
def update_batch(
    batch_id: int,
    batch_data: BatchUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    db_batch = get_owned_batch(db, batch_id, context)
    logger.info("Update batch called for batch_id=%d with data: %s", batch_id, batch_data.model_dump(exclude_unset=True))
    try:
        return crud_batch.update_batch(db, db_batch=db_batch, batch_data=batch_data, changed_by=context.user_id)
    except crud_batch.DuplicateBatchName as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{batch_id}")
def delete_batch(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    db_batch = get_owned_batch(db, batch_id, context)
    crud_batch.delete_batch(db, db_batch=db_batch, changed_by=context.user_id)
    return {"message": "Batch deleted successfully"}


@router.get("/{batch_id}/audit-log")
def read_batch_audit_log(
    batch_id: int,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(require_group(["admin"])),
):
    logs = get_audit_logs(db, table_name='batch', record_id=batch_id, tenant_id=context.tenant_id)
    return [
        {
            "action": log.action,
            "changed_by": log.changed_by,
            "changed_at": log.changed_at,
            "old_values": log.old_values,
            "new_values": log.new_values,
        }
        for log in logs
    ]
