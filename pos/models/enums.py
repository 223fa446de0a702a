"""Enumerated values stored in string columns."""

from enum import Enum
from typing import Type, TypeVar


E = TypeVar("E", bound=Enum)


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Order-level payment state. REFUNDED is declared but no operation sets it."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    DIGITAL_WALLET = "digital_wallet"


class PaymentRecordStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


def values(enum_cls: Type[Enum]) -> tuple:
    return tuple(m.value for m in enum_cls)


def parse_enum(enum_cls: Type[E], value) -> E:
    """Return the member of ``enum_cls`` for ``value`` or raise ValueError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"invalid {enum_cls.__name__}: {value!r}") from None
