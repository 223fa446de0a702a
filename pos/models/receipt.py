from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship
from .base import Base, new_id, utcnow


class Receipt(Base):
    __tablename__ = "receipt"
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_receipt_total_amount"),
        CheckConstraint("tax_amount >= 0", name="ck_receipt_tax_amount"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    # unique: at most one receipt per order, enforced by the database
    order_id = Column(String(36), ForeignKey("order.id", ondelete="CASCADE"), nullable=False, unique=True)
    receipt_number = Column(String(50), nullable=False, unique=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    order = relationship("Order")
