from typing import Optional

from ..db.session import get_session
from ..errors import InvalidArgument
from ..models.customer import Customer
from ..models.product import Product
from ..repositories import CustomerRepository, ProductRepository, unit_of_work
from ..utils.validators import ensure_amount, ensure_optional_text, ensure_text
from .logging import log_event


class CatalogService:
    """Products and customers the order workflow resolves against.

    Only create and get-by-id are offered; listing and editing catalog
    records is left to back-office tooling.
    """

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    def create_product(
        self,
        *,
        sku: str,
        name: str,
        price,
        description: Optional[str] = None,
    ) -> Product:
        sku = ensure_text(sku, "sku", max_length=128)
        name = ensure_text(name, "name")
        amount = ensure_amount(price, "price")
        description = ensure_optional_text(description, "description")
        with unit_of_work(self._session_factory, "create product") as session:
            products = ProductRepository(session)
            if products.find_by_sku(sku) is not None:
                raise InvalidArgument(f"sku already exists: {sku}")
            product = products.create(sku=sku, name=name, price=amount, description=description)
        log_event("info", "product.created", product_id=product.id, sku=sku)
        return product

    def get_product(self, product_id: str) -> Product:
        with unit_of_work(self._session_factory, "get product") as session:
            return ProductRepository(session).get_by_id(product_id)

    def create_customer(
        self,
        *,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Customer:
        name = ensure_text(name, "name")
        email = ensure_optional_text(email, "email", max_length=255)
        email = email.lower() if email else None
        phone = ensure_optional_text(phone, "phone", max_length=50)
        address = ensure_optional_text(address, "address")
        if email is not None and "@" not in email:
            raise InvalidArgument(f"invalid email: {email}")
        with unit_of_work(self._session_factory, "create customer") as session:
            customers = CustomerRepository(session)
            if email is not None and customers.find_by_email(email) is not None:
                raise InvalidArgument(f"email already registered: {email}")
            customer = customers.create(name=name, email=email, phone=phone, address=address)
        log_event("info", "customer.created", customer_id=customer.id)
        return customer

    def get_customer(self, customer_id: str) -> Customer:
        with unit_of_work(self._session_factory, "get customer") as session:
            return CustomerRepository(session).get_by_id(customer_id)
