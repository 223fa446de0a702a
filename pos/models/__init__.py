from .base import Base
from .customer import Customer
from .order import Order, OrderItem
from .payment import Payment
from .product import Product
from .receipt import Receipt
from .sequence import OrderNumberSeq, ReceiptNumberSeq

__all__ = [
    "Base",
    "Customer",
    "Order",
    "OrderItem",
    "OrderNumberSeq",
    "Payment",
    "Product",
    "Receipt",
    "ReceiptNumberSeq",
]
