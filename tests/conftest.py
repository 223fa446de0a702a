from decimal import Decimal

import pytest

from app import create_app
from pos.config import AppConfig
from pos.db.session import build_engine, create_session_factory
from pos.models import Base
from pos.services.catalog_service import CatalogService
from pos.services.order_service import OrderService


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'pos.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def catalog(session_factory):
    return CatalogService(session_factory)


@pytest.fixture
def service(session_factory):
    return OrderService(session_factory)


@pytest.fixture
def product(catalog):
    return catalog.create_product(sku="SKU-100", name="Espresso machine", price=Decimal("100.00"))


@pytest.fixture
def cheap_product(catalog):
    return catalog.create_product(sku="SKU-5", name="Filter paper", price="5.50")


@pytest.fixture
def customer(catalog):
    return catalog.create_customer(name="Dana Reyes", email="dana@example.com")


@pytest.fixture
def order(service, product):
    """The reference order: 2 x 100.00 - 10.00, tax 15.00, order discount 5.00 -> 200.00."""
    return service.create_order(
        items=[{"product_id": product.id, "quantity": 2, "discount": "10.00"}],
        tax_amount="15.00",
        discount_amount="5.00",
    )


@pytest.fixture
def paid_order(service, order):
    service.process_payment(order.id, amount="200.00", payment_method="cash")
    return service.get_order(order.id)


def make_config(**overrides) -> AppConfig:
    values = dict(
        database_url="sqlite://",
        secret_key="test",
        log_level="WARNING",
        currency="USD",
        strict_status_transitions=False,
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def app(session_factory):
    return create_app(make_config(), session_factory)


@pytest.fixture
def client(app):
    return app.test_client()


def count_rows(session_factory, model) -> int:
    with session_factory() as session:
        return session.query(model).count()
