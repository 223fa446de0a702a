from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from .base import Base, new_id, utcnow
from .enums import OrderStatus, PaymentStatus, values


def _in(column: str, allowed: tuple) -> str:
    quoted = ", ".join(f"'{v}'" for v in allowed)
    return f"{column} IN ({quoted})"


class Order(Base):
    __tablename__ = "order"
    __table_args__ = (
        CheckConstraint(_in("status", values(OrderStatus)), name="ck_order_status"),
        CheckConstraint(_in("payment_status", values(PaymentStatus)), name="ck_order_payment_status"),
        CheckConstraint("subtotal >= 0", name="ck_order_subtotal"),
        CheckConstraint("tax_amount >= 0", name="ck_order_tax_amount"),
        CheckConstraint("discount_amount >= 0", name="ck_order_discount_amount"),
        CheckConstraint("total_amount >= 0", name="ck_order_total_amount"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    order_number = Column(String(50), nullable=False, unique=True)
    customer_id = Column(String(36), ForeignKey("customer.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(32), nullable=False, default=OrderStatus.PENDING.value)
    subtotal = Column(Numeric(12, 2), nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    discount_amount = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_status = Column(String(32), nullable=False, default=PaymentStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    customer = relationship("Customer")

    # Items live and die with their order.
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    __tablename__ = "order_item"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_item_quantity"),
        CheckConstraint("unit_price >= 0", name="ck_order_item_unit_price"),
        CheckConstraint("discount >= 0", name="ck_order_item_discount"),
        CheckConstraint("total_price >= 0", name="ck_order_item_total_price"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("order.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("product.id", ondelete="RESTRICT"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)  # snapshot of product.price
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    total_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")
