from typing import List, Optional
from datetime import date
from decimal import Decimal
from sqlalchemy.orm import Session
from models.transactions import Transaction, TransactionKind, TransactionStatus, PaymentMethod
from schemas.transactions import TransactionCreate, LogSaleRequest
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict


def get_transaction(db: Session, transaction_id: int, tenant_id: str) -> Optional[Transaction]:
    return db.query(Transaction).filter(Transaction.id == transaction_id, Transaction.tenant_id == tenant_id).first()


def get_transactions_for_batch(db: Session, batch_id: int, tenant_id: str) -> List[Transaction]:
    return db.query(Transaction).filter(
        Transaction.batch_id == batch_id,
        Transaction.tenant_id == tenant_id,
    ).order_by(Transaction.date.desc(), Transaction.id.desc()).all()


def get_transactions_for_user(db: Session, user_id: str, tenant_id: str, start_date: Optional[date] = None,
                              end_date: Optional[date] = None, skip: int = 0, limit: int = 100) -> List[Transaction]:
    query = db.query(Transaction).filter(Transaction.user_id == user_id, Transaction.tenant_id == tenant_id)
    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date <= end_date)
    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).offset(skip).limit(limit).all()


def create_transaction(db: Session, transaction: TransactionCreate, tenant_id: str, user_id: str) -> Transaction:
    db_transaction = Transaction(
        **transaction.model_dump(),
        tenant_id=tenant_id,
        user_id=user_id,
        created_by=user_id,
        updated_by=user_id,
    )
    db.add(db_transaction)
    db.flush()
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=tenant_id,
        table_name='transactions',
        record_id=db_transaction.id,
        changed_by=user_id,
        action='INSERT',
        new_values=sqlalchemy_to_dict(db_transaction),
    ), commit=False)
    db.commit()
    db.refresh(db_transaction)
    return db_transaction


def log_sale(db: Session, batch, sale: LogSaleRequest, tenant_id: str, user_id: str) -> Transaction:
    """Records a bird sale from a batch as a credit on the farmer's ledger."""
    total_amount = sale.total_weight * sale.rate_per_kg
    transaction = TransactionCreate(
        date=sale.date,
        description=f"Sale of {sale.quantity_sold} birds from batch {batch.name}",
        # Revenue for the farmer decreases the outstanding balance with the dealer
        amount=-Decimal(str(round(total_amount, 2))),
        kind=TransactionKind.SALE,
        status=TransactionStatus.PAID,
        batch_id=batch.id,
        user_name=sale.buyer_name,
        dealer_id=sale.dealer_id,
        payment_method=PaymentMethod.CASH,
        quantity_sold=sale.quantity_sold,
        total_weight=sale.total_weight,
    )
    return create_transaction(db, transaction, tenant_id=tenant_id, user_id=user_id)


def delete_transaction(db: Session, db_transaction: Transaction, changed_by: str):
    old_values = sqlalchemy_to_dict(db_transaction)
    transaction_id = db_transaction.id
    tenant_id = db_transaction.tenant_id
    db.delete(db_transaction)
    create_audit_log(db=db, log_entry=AuditLogCreate(
        tenant_id=tenant_id,
        table_name='transactions',
        record_id=transaction_id,
        changed_by=changed_by,
        action='DELETE',
        old_values=old_values,
    ), commit=False)
    db.commit()
    return True
