"""Product and customer lookups used when pricing and attributing orders."""

from decimal import Decimal
from typing import Optional

from ..errors import NotFound
from ..models.customer import Customer
from ..models.product import Product
from .base import SessionRepository


class ProductRepository(SessionRepository):
    def get_by_id(self, product_id: str) -> Product:
        product = self._session.get(Product, product_id) if product_id else None
        if product is None:
            raise NotFound("product", product_id)
        return product

    def find_by_sku(self, sku: str) -> Optional[Product]:
        return self._session.query(Product).filter(Product.sku == sku).first()

    def create(self, *, sku: str, name: str, price: Decimal, description: Optional[str] = None) -> Product:
        product = Product(sku=sku, name=name, price=price, description=description)
        self._session.add(product)
        self._session.flush()
        return product


class CustomerRepository(SessionRepository):
    def get_by_id(self, customer_id: str) -> Customer:
        customer = self._session.get(Customer, customer_id) if customer_id else None
        if customer is None:
            raise NotFound("customer", customer_id)
        return customer

    def find_by_email(self, email: str) -> Optional[Customer]:
        return self._session.query(Customer).filter(Customer.email == email).first()

    def create(
        self,
        *,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Customer:
        customer = Customer(name=name, email=email, phone=phone, address=address)
        self._session.add(customer)
        self._session.flush()
        return customer
