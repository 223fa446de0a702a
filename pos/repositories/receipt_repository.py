import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from ..errors import NotFound
from ..models.base import utcnow
from ..models.order import Order
from ..models.receipt import Receipt
from ..models.sequence import ReceiptNumberSeq
from .base import SessionRepository
from .sequence import next_number


logger = logging.getLogger(__name__)


class ReceiptRepository(SessionRepository):
    def find_by_order_id(self, order_id: str) -> Optional[Receipt]:
        return (
            self._session.query(Receipt)
            .options(selectinload(Receipt.order).selectinload(Order.customer))
            .filter(Receipt.order_id == order_id)
            .first()
        )

    def get_by_order_id(self, order_id: str) -> Receipt:
        receipt = self.find_by_order_id(order_id)
        if receipt is None:
            raise NotFound("receipt", order_id)
        return receipt

    def create_with_next_number(self, receipt: Receipt) -> Tuple[Receipt, bool]:
        """Insert ``receipt`` with the next receipt number.

        Returns ``(receipt, created)``. When another transaction already
        issued a receipt for the same order, the unique constraint on
        ``order_id`` rejects this insert; the savepoint is rolled back
        (releasing the drawn number) and the existing receipt is returned.
        """
        try:
            with self._session.begin_nested():
                receipt.receipt_number = next_number(self._session, ReceiptNumberSeq)
                receipt.created_at = utcnow()
                self._session.add(receipt)
                self._session.flush()
        except IntegrityError:
            existing = self.find_by_order_id(receipt.order_id)
            if existing is None:
                raise
            logger.info("receipt for order %s already issued concurrently", receipt.order_id)
            return existing, False
        return receipt, True
