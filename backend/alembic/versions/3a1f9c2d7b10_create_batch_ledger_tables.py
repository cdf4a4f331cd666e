"""create batch, daily entry, transaction and audit tables

Revision ID: 3a1f9c2d7b10
Revises:
Create Date: 2026-10-19 10:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3a1f9c2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'batch',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        sa.Column('farmer_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('initial_bird_count', sa.Integer(), nullable=False),
        *_timestamp_columns(),
        sa.UniqueConstraint('tenant_id', 'farmer_id', 'name', name='_tenant_farmer_batch_name_uc'),
    )
    op.create_index('ix_batch_id', 'batch', ['id'])
    op.create_index('ix_batch_tenant_id', 'batch', ['tenant_id'])
    op.create_index('ix_batch_farmer_id', 'batch', ['farmer_id'])

    op.create_table(
        'daily_entry',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batch.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('mortality', sa.Integer(), nullable=False),
        sa.Column('feed_consumed_in_kg', sa.Float(), nullable=False),
        sa.Column('average_weight_in_grams', sa.Float(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        *_timestamp_columns(),
        sa.UniqueConstraint('batch_id', 'date', name='_batch_date_uc'),
    )
    op.create_index('ix_daily_entry_id', 'daily_entry', ['id'])
    op.create_index('ix_daily_entry_tenant_id', 'daily_entry', ['tenant_id'])
    op.create_index('ix_daily_entry_batch_id', 'daily_entry', ['batch_id'])

    transaction_kind = sa.Enum('SALE', 'EXPENSE', 'PAYMENT', 'PURCHASE', name='transactionkind')
    transaction_status = sa.Enum('PAID', 'PENDING', name='transactionstatus')
    payment_method = sa.Enum('CASH', 'BANK_TRANSFER', 'CREDIT', 'UPI', 'RTGS', 'NEFT', name='paymentmethod')

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batch.id', ondelete='SET NULL'), nullable=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=True),
        sa.Column('dealer_id', sa.String(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('kind', transaction_kind, nullable=True),
        sa.Column('status', transaction_status, nullable=False),
        sa.Column('payment_method', payment_method, nullable=True),
        sa.Column('reference_number', sa.String(), nullable=True),
        sa.Column('remarks', sa.String(), nullable=True),
        sa.Column('inventory_item_name', sa.String(), nullable=True),
        sa.Column('quantity_sold', sa.Integer(), nullable=True),
        sa.Column('total_weight', sa.Float(), nullable=True),
        sa.Column('cost_of_goods_sold', sa.Numeric(12, 2), nullable=True),
        sa.Column('is_business_expense', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
    )
    op.create_index('ix_transactions_id', 'transactions', ['id'])
    op.create_index('ix_transactions_tenant_id', 'transactions', ['tenant_id'])
    op.create_index('ix_transactions_batch_id', 'transactions', ['batch_id'])
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        sa.Column('table_name', sa.String(), nullable=False),
        sa.Column('record_id', sa.Integer(), nullable=False),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('changed_by', sa.String(), nullable=False),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('old_values', sa.JSON(), nullable=True),
        sa.Column('new_values', sa.JSON(), nullable=True),
    )
    op.create_index('ix_audit_log_id', 'audit_log', ['id'])
    op.create_index('ix_audit_log_tenant_id', 'audit_log', ['tenant_id'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('transactions')
    op.drop_table('daily_entry')
    op.drop_table('batch')
    sa.Enum(name='paymentmethod').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='transactionstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='transactionkind').drop(op.get_bind(), checkfirst=True)
