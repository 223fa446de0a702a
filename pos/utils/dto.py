from typing import Any, Dict, Optional


def _money(value) -> float:
    return float(value or 0)


def _ts(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def to_product_dto(row: Any) -> Dict:
    return {
        "id": getattr(row, "id", None),
        "sku": getattr(row, "sku", None),
        "name": getattr(row, "name", None),
        "description": getattr(row, "description", None),
        "price": _money(getattr(row, "price", 0)),
        "created_at": _ts(getattr(row, "created_at", None)),
        "updated_at": _ts(getattr(row, "updated_at", None)),
    }


def to_customer_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "name": row.name,
        "email": row.email,
        "phone": row.phone,
        "address": row.address,
        "created_at": _ts(row.created_at),
        "updated_at": _ts(row.updated_at),
    }


def to_order_item_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "product_id": row.product_id,
        "product": to_product_dto(row.product) if row.product is not None else None,
        "quantity": row.quantity,
        "unit_price": _money(row.unit_price),
        "discount": _money(row.discount),
        "total_price": _money(row.total_price),
    }


def to_order_dto(row: Any, *, include_items: bool = True) -> Dict:
    dto = {
        "id": row.id,
        "order_number": row.order_number,
        "customer_id": row.customer_id,
        "customer": to_customer_dto(row.customer) if row.customer is not None else None,
        "status": row.status,
        "payment_status": row.payment_status,
        "subtotal": _money(row.subtotal),
        "tax_amount": _money(row.tax_amount),
        "discount_amount": _money(row.discount_amount),
        "total_amount": _money(row.total_amount),
        "notes": row.notes,
        "created_at": _ts(row.created_at),
        "updated_at": _ts(row.updated_at),
    }
    if include_items:
        dto["items"] = [to_order_item_dto(it) for it in row.items]
    return dto


def to_payment_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "order_id": row.order_id,
        "amount": _money(row.amount),
        "payment_method": row.payment_method,
        "reference": row.reference,
        "status": row.status,
        "created_at": _ts(row.created_at),
    }


def to_receipt_dto(row: Any) -> Dict:
    return {
        "id": row.id,
        "order_id": row.order_id,
        "order": to_order_dto(row.order, include_items=False) if row.order is not None else None,
        "receipt_number": row.receipt_number,
        "total_amount": _money(row.total_amount),
        "tax_amount": _money(row.tax_amount),
        "created_at": _ts(row.created_at),
    }
