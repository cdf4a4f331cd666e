from models.audit_log import AuditLog
from models.batch import Batch
from models.daily_entry import DailyEntry
from models.transactions import Transaction, TransactionKind, TransactionStatus, PaymentMethod

__all__ = ['AuditLog', 'Batch', 'DailyEntry', 'PaymentMethod', 'Transaction', 'TransactionKind', 'TransactionStatus',]
