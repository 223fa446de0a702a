from decimal import Decimal, InvalidOperation
from typing import Optional

from ..errors import InvalidArgument
from ..services.pricing import to_money


def ensure_positive_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} must be an integer") from None
    if isinstance(value, float) and value != number:
        raise InvalidArgument(f"{field} must be an integer")
    if number <= 0:
        raise InvalidArgument(f"{field} must be greater than 0")
    return number


def ensure_amount(value, field: str, *, allow_zero: bool = True) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"{field} must be a number")
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgument(f"{field} must be a number") from None
    if not parsed.is_finite():
        raise InvalidArgument(f"{field} must be a number")
    try:
        amount = to_money(parsed)
    except InvalidOperation:
        raise InvalidArgument(f"{field} must be a number") from None
    # sub-cent input is rejected, never rounded
    if amount != parsed:
        raise InvalidArgument(f"{field} must have at most 2 decimal places")
    if amount < 0:
        raise InvalidArgument(f"{field} cannot be negative")
    if not allow_zero and amount == 0:
        raise InvalidArgument(f"{field} must be greater than 0")
    return amount


def ensure_text(value, field: str, max_length: int = 255) -> str:
    text = str(value or "").strip()
    if not text:
        raise InvalidArgument(f"{field} is required")
    if len(text) > max_length:
        raise InvalidArgument(f"{field} must be at most {max_length} characters")
    return text


def ensure_optional_text(value, field: str, max_length: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be a string")
    text = value.strip()
    if max_length is not None and len(text) > max_length:
        raise InvalidArgument(f"{field} must be at most {max_length} characters")
    return text or None
