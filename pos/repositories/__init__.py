"""Session-bound data access for the order workflow.

Each repository wraps the SQLAlchemy session of the current unit of work, so
several repositories used inside one ``unit_of_work`` block commit or roll
back together.
"""

from .base import unit_of_work
from .catalog import CustomerRepository, ProductRepository
from .order_repository import OrderRepository
from .payment_repository import PaymentRepository
from .receipt_repository import ReceiptRepository

__all__ = [
    "CustomerRepository",
    "OrderRepository",
    "PaymentRepository",
    "ProductRepository",
    "ReceiptRepository",
    "unit_of_work",
]
