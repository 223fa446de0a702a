from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Numeric, String
from .base import Base, new_id, utcnow
from .enums import PaymentMethod, PaymentRecordStatus, values
from .order import _in


class Payment(Base):
    """Append-only payment record applied against an order balance."""

    __tablename__ = "payment"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_amount"),
        CheckConstraint(_in("payment_method", values(PaymentMethod)), name="ck_payment_method"),
        CheckConstraint(_in("status", values(PaymentRecordStatus)), name="ck_payment_status"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("order.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(32), nullable=False)
    reference = Column(String(255), nullable=True)
    status = Column(String(32), nullable=False, default=PaymentRecordStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
