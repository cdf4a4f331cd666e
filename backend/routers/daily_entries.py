from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.daily_entry import DailyEntryCreate, DailyEntry as DailyEntrySchema
import crud.daily_entry as crud_daily_entry
from routers.batch import get_owned_batch
from utils import today_ist
from utils.auth_utils import RequestContext, get_request_context

import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/batches/{batch_id}/daily-entries",
    tags=["Daily Entries"],
)


@router.post("/", response_model=DailyEntrySchema, status_code=201)
def create_daily_entry(
    batch_id: int,
    entry: DailyEntryCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    db_batch = get_owned_batch(db, batch_id, context)
    if entry.date < db_batch.start_date or entry.date > today_ist():
        raise HTTPException(status_code=400, detail="Entry date must be between the batch start date and today.")
    if crud_daily_entry.get_entry_for_date(db, batch_id=batch_id, entry_date=entry.date, tenant_id=context.tenant_id):
        raise HTTPException(status_code=400, detail=f"A daily entry for {entry.date} already exists for this batch.")

    logger.info("Creating daily entry for batch_id=%d on %s", batch_id, entry.date)
    return crud_daily_entry.create_daily_entry(db, batch_id=batch_id, entry=entry, tenant_id=context.tenant_id, changed_by=context.user_id)


@router.get("/", response_model=List[DailyEntrySchema])
def read_daily_entries(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    """Daily entries for the batch, most recent first."""
    get_owned_batch(db, batch_id, context)
    return crud_daily_entry.get_entries_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)
