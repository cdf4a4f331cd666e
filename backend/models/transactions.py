from sqlalchemy import Column, Integer, String, Date, Float, Numeric, Boolean, ForeignKey, Enum
from database import Base
from models.audit_mixin import TimestampMixin
import enum


class TransactionKind(enum.Enum):
    SALE = "sale"
    EXPENSE = "expense"
    PAYMENT = "payment"
    PURCHASE = "purchase"


class TransactionStatus(enum.Enum):
    PAID = "Paid"
    PENDING = "Pending"


class PaymentMethod(enum.Enum):
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CREDIT = "Credit"
    UPI = "UPI"
    RTGS = "RTGS"
    NEFT = "NEFT"


class Transaction(Base, TimestampMixin):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True)
    batch_id = Column(Integer, ForeignKey("batch.id", ondelete="SET NULL"), index=True, nullable=True)
    user_id = Column(String, index=True, nullable=False)
    user_name = Column(String, nullable=True)
    dealer_id = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    # Negative amounts are credits to the farmer (e.g. bird sales)
    amount = Column(Numeric(12, 2), nullable=False)
    # Legacy rows have no kind and are classified by description
    kind = Column(Enum(TransactionKind), nullable=True)
    status = Column(Enum(TransactionStatus), default=TransactionStatus.PENDING, nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=True)
    reference_number = Column(String, nullable=True)
    remarks = Column(String, nullable=True)
    inventory_item_name = Column(String, nullable=True)
    quantity_sold = Column(Integer, nullable=True)
    total_weight = Column(Float, nullable=True)
    cost_of_goods_sold = Column(Numeric(12, 2), nullable=True)
    is_business_expense = Column(Boolean, default=False, nullable=False)
