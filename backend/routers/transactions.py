from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas.transactions import TransactionCreate, LogSaleRequest, Transaction as TransactionSchema
import crud.transactions as crud_transactions
from routers.batch import get_owned_batch
from utils.auth_utils import RequestContext, get_request_context

import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)


@router.post("/", response_model=TransactionSchema, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    if transaction.batch_id is not None:
        get_owned_batch(db, transaction.batch_id, context)
    return crud_transactions.create_transaction(db, transaction, tenant_id=context.tenant_id, user_id=context.user_id)


@router.get("/", response_model=List[TransactionSchema])
def read_transactions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="Start date cannot be after the end date")
    return crud_transactions.get_transactions_for_user(
        db, user_id=context.user_id, tenant_id=context.tenant_id,
        start_date=start_date, end_date=end_date, skip=skip, limit=limit,
    )


@router.get("/batches/{batch_id}", response_model=List[TransactionSchema])
def read_batch_transactions(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    get_owned_batch(db, batch_id, context)
    return crud_transactions.get_transactions_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)


@router.post("/batches/{batch_id}/sale", response_model=TransactionSchema, status_code=201)
def log_sale(
    batch_id: int,
    sale: LogSaleRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    db_batch = get_owned_batch(db, batch_id, context)
    logger.info("Logging sale of %d birds for batch_id=%d", sale.quantity_sold, batch_id)
    return crud_transactions.log_sale(db, batch=db_batch, sale=sale, tenant_id=context.tenant_id, user_id=context.user_id)


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    db_transaction = crud_transactions.get_transaction(db, transaction_id=transaction_id, tenant_id=context.tenant_id)
    if db_transaction is None or db_transaction.user_id != context.user_id:
        raise HTTPException(status_code=404, detail="Transaction not found")
    crud_transactions.delete_transaction(db, db_transaction=db_transaction, changed_by=context.user_id)
    return {"message": "Transaction deleted successfully"}
