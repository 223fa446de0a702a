"""Line-item and order total arithmetic.

Everything here is pure: amounts are clamped at zero rather than rejected,
so callers validate quantities and discounts first.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence, Tuple, Union


CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Amount = Union[Decimal, int, float, str]


def to_money(value: Amount) -> Decimal:
    """Coerce ``value`` to a 2-place Decimal (floats go through ``str``)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    quantity: int
    unit_price: Decimal
    discount: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class OrderTotals:
    lines: Tuple[PricedLine, ...]
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal


def line_total(unit_price: Amount, quantity: int, discount: Amount = ZERO) -> Decimal:
    total = to_money(unit_price) * int(quantity) - to_money(discount)
    return max(ZERO, to_money(total))


def order_total(subtotal: Amount, tax_amount: Amount, discount_amount: Amount) -> Decimal:
    total = to_money(subtotal) + to_money(tax_amount) - to_money(discount_amount)
    return max(ZERO, total)


def price_lines(lines: Iterable[Tuple[object, int, Amount]]) -> List[PricedLine]:
    """Price ``(product, quantity, discount)`` triples at the product's current price."""
    priced = []
    for product, quantity, discount in lines:
        unit_price = to_money(product.price)
        priced.append(
            PricedLine(
                product_id=product.id,
                quantity=int(quantity),
                unit_price=unit_price,
                discount=to_money(discount),
                total_price=line_total(unit_price, quantity, discount),
            )
        )
    return priced


def calculate(
    lines: Sequence[Tuple[object, int, Amount]],
    tax_amount: Amount = ZERO,
    discount_amount: Amount = ZERO,
) -> OrderTotals:
    priced = price_lines(lines)
    subtotal = sum((p.total_price for p in priced), ZERO)
    return OrderTotals(
        lines=tuple(priced),
        subtotal=subtotal,
        tax_amount=to_money(tax_amount),
        discount_amount=to_money(discount_amount),
        total_amount=order_total(subtotal, tax_amount, discount_amount),
    )
