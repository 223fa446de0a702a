"""Order fulfillment workflow: order creation, payments and receipts."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from ..db.session import get_session
from ..errors import InvalidArgument, InvalidState
from ..models.base import new_id
from ..models.enums import OrderStatus, PaymentMethod, PaymentRecordStatus, PaymentStatus, parse_enum
from ..models.order import Order, OrderItem
from ..models.payment import Payment
from ..models.receipt import Receipt
from ..repositories import (
    CustomerRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    ReceiptRepository,
    unit_of_work,
)
from ..utils.validators import ensure_amount, ensure_optional_text, ensure_positive_int
from . import pricing
from .logging import log_event


logger = logging.getLogger(__name__)

# Used only when strict transitions are enabled; re-applying the current
# status is always accepted.
ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    OrderStatus.PENDING.value: frozenset({OrderStatus.COMPLETED.value, OrderStatus.CANCELLED.value}),
    OrderStatus.COMPLETED.value: frozenset(),
    OrderStatus.CANCELLED.value: frozenset(),
}


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    quantity: int
    discount: Decimal = pricing.ZERO

    @classmethod
    def parse(cls, raw: Union["OrderLine", Mapping], index: int) -> "OrderLine":
        if isinstance(raw, OrderLine):
            raw = {"product_id": raw.product_id, "quantity": raw.quantity, "discount": raw.discount}
        if not isinstance(raw, Mapping):
            raise InvalidArgument(f"items[{index}] must be an object")
        product_id = str(raw.get("product_id") or "").strip()
        if not product_id:
            raise InvalidArgument(f"items[{index}].product_id is required")
        return cls(
            product_id=product_id,
            quantity=ensure_positive_int(raw.get("quantity"), f"items[{index}].quantity"),
            discount=ensure_amount(raw.get("discount", 0), f"items[{index}].discount"),
        )


class OrderService:
    """Runs each workflow operation as one unit of work.

    Every public method opens its own transaction through ``session_factory``;
    failures roll back everything the call wrote.
    """

    def __init__(self, session_factory=get_session, *, strict_transitions: bool = False):
        self._session_factory = session_factory
        self._strict_transitions = strict_transitions

    def create_order(
        self,
        *,
        items: Iterable[Union[OrderLine, Mapping]],
        customer_id: Optional[str] = None,
        tax_amount=0,
        discount_amount=0,
        notes: Optional[str] = None,
    ) -> Order:
        lines = [OrderLine.parse(raw, i) for i, raw in enumerate(items or [])]
        if not lines:
            raise InvalidArgument("order must have at least one item")
        tax = ensure_amount(tax_amount, "tax_amount")
        discount = ensure_amount(discount_amount, "discount_amount")
        customer_id = ensure_optional_text(customer_id, "customer_id")
        notes = ensure_optional_text(notes, "notes")

        with unit_of_work(self._session_factory, "create order") as session:
            customer = CustomerRepository(session).get_by_id(customer_id) if customer_id else None
            products = ProductRepository(session)
            by_id = {}
            for ln in lines:
                if ln.product_id not in by_id:
                    by_id[ln.product_id] = products.get_by_id(ln.product_id)
            resolved = [(by_id[ln.product_id], ln.quantity, ln.discount) for ln in lines]
            totals = pricing.calculate(resolved, tax, discount)

            order = Order(
                id=new_id(),
                customer_id=customer_id,
                customer=customer,
                status=OrderStatus.PENDING.value,
                payment_status=PaymentStatus.PENDING.value,
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                discount_amount=totals.discount_amount,
                total_amount=totals.total_amount,
                notes=notes,
            )
            order_items = [
                OrderItem(
                    id=new_id(),
                    product_id=ln.product_id,
                    product=by_id[ln.product_id],
                    quantity=ln.quantity,
                    unit_price=ln.unit_price,
                    discount=ln.discount,
                    total_price=ln.total_price,
                )
                for ln in totals.lines
            ]
            OrderRepository(session).create(order, order_items)

        log_event(
            "info",
            "order.created",
            order_id=order.id,
            order_number=order.order_number,
            items=len(order_items),
            subtotal=str(order.subtotal),
            total=str(order.total_amount),
        )
        return order

    def get_order(self, order_id: str) -> Order:
        with unit_of_work(self._session_factory, "get order") as session:
            return OrderRepository(session).get_by_id(order_id)

    def update_order_status(self, order_id: str, status: str) -> Order:
        try:
            new_status = parse_enum(OrderStatus, status).value
        except ValueError as exc:
            raise InvalidArgument(f"invalid status: {status}") from exc

        with unit_of_work(self._session_factory, "update order status") as session:
            orders = OrderRepository(session)
            if self._strict_transitions:
                current = orders.get_by_id(order_id, lock=True).status
                if new_status != current and new_status not in ALLOWED_TRANSITIONS.get(current, frozenset()):
                    raise InvalidState(
                        f"cannot change order status from {current} to {new_status}",
                        current=current,
                        requested=new_status,
                    )
            orders.update_status(order_id, new_status)
            order = orders.get_by_id(order_id)

        log_event("info", "order.status_updated", order_id=order_id, status=new_status)
        return order

    def process_payment(
        self,
        order_id: str,
        *,
        amount,
        payment_method: str,
        reference: Optional[str] = None,
    ) -> Payment:
        """Apply a completed payment against the order balance.

        The order row stays locked from the balance read to the insert, so
        concurrent payments on one order cannot together exceed its total.
        """
        with unit_of_work(self._session_factory, "process payment") as session:
            orders = OrderRepository(session)
            ledger = PaymentRepository(session)
            order = orders.get_by_id(order_id, lock=True)

            value = ensure_amount(amount, "amount", allow_zero=False)
            try:
                method = parse_enum(PaymentMethod, payment_method).value
            except ValueError as exc:
                raise InvalidArgument(f"invalid payment method: {payment_method}") from exc
            reference = ensure_optional_text(reference, "reference", max_length=255)

            total_paid = ledger.sum_completed(order.id)
            if total_paid + value > order.total_amount:
                log_event(
                    "warning",
                    "payment.rejected",
                    order_id=order.id,
                    amount=str(value),
                    total_paid=str(total_paid),
                    total=str(order.total_amount),
                )
                raise InvalidArgument(
                    "payment amount exceeds order total",
                    total_amount=str(order.total_amount),
                    total_paid=str(total_paid),
                    remaining=str(order.total_amount - total_paid),
                )

            payment = ledger.create(
                Payment(
                    id=new_id(),
                    order_id=order.id,
                    amount=value,
                    payment_method=method,
                    reference=reference,
                    status=PaymentRecordStatus.COMPLETED.value,
                )
            )
            fully_paid = total_paid + value >= order.total_amount
            if fully_paid:
                orders.update_payment_status(order.id, PaymentStatus.PAID.value)

        log_event(
            "info",
            "payment.processed",
            order_id=order_id,
            payment_id=payment.id,
            amount=str(value),
            method=method,
            paid=fully_paid,
        )
        return payment

    def list_payments(self, order_id: str) -> List[Payment]:
        with unit_of_work(self._session_factory, "list payments") as session:
            OrderRepository(session).get_by_id(order_id)
            return PaymentRepository(session).list_by_order(order_id)

    def generate_receipt(self, order_id: str) -> Receipt:
        """Return the order's receipt, issuing it on first request.

        Only paid orders get a receipt. Totals are copied from the order at
        issuance and never change afterwards.
        """
        with unit_of_work(self._session_factory, "generate receipt") as session:
            order = OrderRepository(session).get_by_id(order_id, lock=True)
            if order.payment_status != PaymentStatus.PAID.value:
                raise InvalidState(
                    "cannot generate receipt for unpaid order",
                    payment_status=order.payment_status,
                )

            receipts = ReceiptRepository(session)
            receipt = receipts.find_by_order_id(order.id)
            created = False
            if receipt is None:
                receipt, created = receipts.create_with_next_number(
                    Receipt(
                        id=new_id(),
                        order_id=order.id,
                        order=order,
                        total_amount=order.total_amount,
                        tax_amount=order.tax_amount,
                    )
                )

        log_event(
            "info",
            "receipt.generated" if created else "receipt.reused",
            order_id=order_id,
            receipt_number=receipt.receipt_number,
        )
        return receipt

    def get_receipt(self, order_id: str) -> Receipt:
        with unit_of_work(self._session_factory, "get receipt") as session:
            OrderRepository(session).get_by_id(order_id)
            return ReceiptRepository(session).get_by_order_id(order_id)

    def get_orders_by_customer(self, customer_id: str) -> List[Order]:
        with unit_of_work(self._session_factory, "list customer orders") as session:
            return OrderRepository(session).list_by_customer(customer_id)
