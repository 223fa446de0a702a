from decimal import Decimal
from typing import List

from sqlalchemy import func

from ..models.base import utcnow
from ..models.enums import PaymentRecordStatus
from ..models.payment import Payment
from ..services.pricing import to_money
from .base import SessionRepository


class PaymentRepository(SessionRepository):
    """Append-only ledger of payments per order."""

    def sum_completed(self, order_id: str) -> Decimal:
        total = (
            self._session.query(func.coalesce(func.sum(Payment.amount), 0))
            .filter(
                Payment.order_id == order_id,
                Payment.status == PaymentRecordStatus.COMPLETED.value,
            )
            .scalar()
        )
        return to_money(total)

    def create(self, payment: Payment) -> Payment:
        now = utcnow()
        payment.created_at = now
        payment.updated_at = now
        self._session.add(payment)
        self._session.flush()
        return payment

    def list_by_order(self, order_id: str) -> List[Payment]:
        return (
            self._session.query(Payment)
            .filter(Payment.order_id == order_id)
            .order_by(Payment.created_at.desc())
            .all()
        )
