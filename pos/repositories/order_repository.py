from typing import List, Sequence

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from ..errors import NotFound
from ..models.base import utcnow
from ..models.order import Order, OrderItem
from ..models.sequence import OrderNumberSeq
from .base import SessionRepository
from .sequence import next_number


def order_detail_options():
    """Eager loads for an order rendered with its customer and item products."""
    return (
        selectinload(Order.customer),
        selectinload(Order.items).selectinload(OrderItem.product),
    )


class OrderRepository(SessionRepository):
    def create(self, order: Order, items: Sequence[OrderItem]) -> Order:
        """Write the header, its items and a fresh order number in one flush."""
        order.order_number = next_number(self._session, OrderNumberSeq)
        now = utcnow()
        order.created_at = now
        order.updated_at = now
        for position, item in enumerate(items):
            item.position = position
            item.created_at = now
            order.items.append(item)
        self._session.add(order)
        self._session.flush()
        return order

    def get_by_id(self, order_id: str, *, lock: bool = False) -> Order:
        """Load an order with its customer, items and item products.

        ``lock=True`` takes a row lock held until the unit of work ends.
        """
        q = (
            self._session.query(Order)
            .options(*order_detail_options())
            .filter(Order.id == order_id)
        )
        if lock:
            q = q.with_for_update()
        order = q.first()
        if order is None:
            raise NotFound("order", order_id)
        return order

    def _update(self, order_id: str, values: dict) -> None:
        values = dict(values, updated_at=utcnow())
        rows = (
            self._session.query(Order)
            .filter(Order.id == order_id)
            .update(values, synchronize_session="fetch")
        )
        if rows == 0:
            raise NotFound("order", order_id)

    def update_status(self, order_id: str, status: str) -> None:
        self._update(order_id, {"status": status})

    def update_payment_status(self, order_id: str, payment_status: str) -> None:
        self._update(order_id, {"payment_status": payment_status})

    def list_by_customer(self, customer_id: str) -> List[Order]:
        return (
            self._session.query(Order)
            .options(*order_detail_options())
            .filter(Order.customer_id == customer_id)
            # same prefix everywhere, so longer numbers are larger: ORD-10000 > ORD-9999
            .order_by(
                Order.created_at.desc(),
                func.length(Order.order_number).desc(),
                Order.order_number.desc(),
            )
            .all()
        )
