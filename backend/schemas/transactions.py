from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date
from decimal import Decimal
from models.transactions import TransactionKind, TransactionStatus, PaymentMethod


class TransactionBase(BaseModel):
    date: date
    description: str
    amount: Decimal
    kind: Optional[TransactionKind] = None
    status: TransactionStatus = TransactionStatus.PENDING
    batch_id: Optional[int] = None
    user_name: Optional[str] = None
    dealer_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = None
    remarks: Optional[str] = None
    inventory_item_name: Optional[str] = None
    quantity_sold: Optional[int] = Field(default=None, ge=0)
    total_weight: Optional[float] = Field(default=None, ge=0)
    cost_of_goods_sold: Optional[Decimal] = None
    is_business_expense: bool = False

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        if not v or not v.strip():
            raise ValueError('Description is required.')
        return v


class TransactionCreate(TransactionBase):
    pass


class Transaction(TransactionBase):
    id: int
    tenant_id: Optional[str] = None
    user_id: str

    class Config:
        from_attributes = True


class LogSaleRequest(BaseModel):
    date: date
    quantity_sold: int = Field(ge=1, description="Must sell at least one bird.")
    total_weight: float = Field(ge=0.1, description="Total weight of the birds sold, in kg.")
    rate_per_kg: float = Field(ge=1, description="Rate per kg must be positive.")
    buyer_name: str
    dealer_id: Optional[str] = None

    @field_validator('buyer_name')
    @classmethod
    def validate_buyer_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Buyer name is required.')
        return v.strip()
