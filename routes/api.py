"""JSON API for the point-of-sale backend."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from pos.errors import InvalidArgument, ServiceError
from pos.utils.dto import (
    to_customer_dto,
    to_order_dto,
    to_payment_dto,
    to_product_dto,
    to_receipt_dto,
)


logger = logging.getLogger(__name__)

api_bp = Blueprint("pos_api", __name__, url_prefix="/api")


def _components() -> Dict[str, Any]:
    return current_app.extensions["pos_components"]


def _orders():
    return _components()["order_service"]


def _catalog():
    return _components()["catalog_service"]


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidArgument("Invalid request body")
    return payload


def _currency() -> str:
    return current_app.config["POS_CONFIG"].currency


def _priced(dto: Dict[str, Any]) -> Dict[str, Any]:
    dto["currency"] = _currency()
    return dto


def _ok(data, status: int = 200, message: str | None = None):
    body = {"data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


@api_bp.errorhandler(ServiceError)
def handle_service_error(exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("request failed: %s", exc, exc_info=exc.__cause__)
    return jsonify(exc.to_dict()), exc.status_code


@api_bp.get("/health")
def health():
    return jsonify({"status": "ok"})


@api_bp.post("/products")
def create_product():
    payload = _json_body()
    product = _catalog().create_product(
        sku=payload.get("sku"),
        name=payload.get("name"),
        price=payload.get("price"),
        description=payload.get("description"),
    )
    return _ok(_priced(to_product_dto(product)), 201, "Product created successfully")


@api_bp.get("/products/<product_id>")
def get_product(product_id: str):
    return _ok(_priced(to_product_dto(_catalog().get_product(product_id))))


@api_bp.post("/customers")
def create_customer():
    payload = _json_body()
    customer = _catalog().create_customer(
        name=payload.get("name"),
        email=payload.get("email"),
        phone=payload.get("phone"),
        address=payload.get("address"),
    )
    return _ok(to_customer_dto(customer), 201, "Customer created successfully")


@api_bp.get("/customers/<customer_id>")
def get_customer(customer_id: str):
    return _ok(to_customer_dto(_catalog().get_customer(customer_id)))


@api_bp.get("/customers/<customer_id>/orders")
def list_customer_orders(customer_id: str):
    orders = _orders().get_orders_by_customer(customer_id)
    return _ok([_priced(to_order_dto(o)) for o in orders])


@api_bp.post("/orders")
def create_order():
    payload = _json_body()
    items = payload.get("items")
    if items is not None and not isinstance(items, list):
        raise InvalidArgument("items must be a list")
    order = _orders().create_order(
        items=items or [],
        customer_id=payload.get("customer_id") or None,
        tax_amount=payload.get("tax_amount", 0),
        discount_amount=payload.get("discount_amount", 0),
        notes=payload.get("notes"),
    )
    return _ok(_priced(to_order_dto(order)), 201, "Order created successfully")


@api_bp.get("/orders/<order_id>")
def get_order(order_id: str):
    return _ok(_priced(to_order_dto(_orders().get_order(order_id))))


@api_bp.put("/orders/<order_id>/status")
def update_order_status(order_id: str):
    payload = _json_body()
    status = str(payload.get("status") or "").strip()
    if not status:
        raise InvalidArgument("Status is required")
    order = _orders().update_order_status(order_id, status)
    return _ok(_priced(to_order_dto(order, include_items=False)), message="Order status updated successfully")


@api_bp.post("/orders/<order_id>/payments")
def process_payment(order_id: str):
    payload = _json_body()
    payment = _orders().process_payment(
        order_id,
        amount=payload.get("amount"),
        payment_method=payload.get("payment_method"),
        reference=payload.get("reference"),
    )
    return _ok(_priced(to_payment_dto(payment)), 201, "Payment processed successfully")


@api_bp.get("/orders/<order_id>/payments")
def list_payments(order_id: str):
    return _ok([_priced(to_payment_dto(p)) for p in _orders().list_payments(order_id)])


@api_bp.post("/orders/<order_id>/receipt")
def generate_receipt(order_id: str):
    receipt = _orders().generate_receipt(order_id)
    return _ok(_priced(to_receipt_dto(receipt)), message="Receipt generated successfully")


@api_bp.get("/orders/<order_id>/receipt")
def get_receipt(order_id: str):
    return _ok(_priced(to_receipt_dto(_orders().get_receipt(order_id))))
