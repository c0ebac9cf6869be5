"""
Shared fixtures: a Flask app over a fresh in-memory schema, stored
accounts and their bearer tokens.

Seeding helpers open their own session and close it before returning so
requests made by the test client never share a transaction with them.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

import pytest

from storefront.core.security import create_client_token, hash_password
from storefront.db.base import Address as DbAddress
from storefront.db.base import Category as DbCategory
from storefront.db.base import City as DbCity
from storefront.db.base import Client as DbClient
from storefront.db.base import ClientRole as DbClientRole
from storefront.db.base import Order as DbOrder
from storefront.db.base import OrderItem as DbOrderItem
from storefront.db.base import Phone as DbPhone
from storefront.db.base import Product as DbProduct
from storefront.db.base import State as DbState
from storefront.db.session import SessionLocal, create_tables, drop_tables
from storefront.domain.entities import ClientType, Role

DEFAULT_PASSWORD = "secret-pw"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_city(name: str = "Springfield") -> int:
    db = SessionLocal()
    try:
        state = DbState(name="North State")
        city = DbCity(name=name, state=state)
        db.add(city)
        db.commit()
        return city.id
    finally:
        db.close()


def create_account(
    name: str,
    email: str,
    city_id: int,
    roles: Iterable[Role] = (Role.CLIENT,),
    password: str = DEFAULT_PASSWORD,
    phones: Iterable[str] = ("5550001",),
) -> dict:
    """Store a client with one address; returns its ids."""
    db = SessionLocal()
    try:
        client = DbClient(
            name=name,
            email=email,
            tax_id="12345678900",
            client_type=ClientType.INDIVIDUAL.code,
            password_hash=hash_password(password),
        )
        client.phones = [DbPhone(number=p) for p in phones]
        client.roles = [DbClientRole(role=r.code) for r in roles]
        address = DbAddress(
            street="Main Street", number="10", district="Center", city_id=city_id
        )
        client.addresses = [address]
        db.add(client)
        db.commit()
        return {"id": client.id, "email": email, "address_id": address.id}
    finally:
        db.close()


def create_category(name: str) -> int:
    db = SessionLocal()
    try:
        category = DbCategory(name=name)
        db.add(category)
        db.commit()
        return category.id
    finally:
        db.close()


def create_product(name: str, price: str, category_ids: Iterable[int] = ()) -> int:
    db = SessionLocal()
    try:
        product = DbProduct(name=name, price=Decimal(price))
        ids = list(category_ids)
        if ids:
            product.categories = (
                db.query(DbCategory).filter(DbCategory.id.in_(ids)).all()
            )
        db.add(product)
        db.commit()
        return product.id
    finally:
        db.close()


def create_order(client_id: int, address_id: int, product_id: int, quantity: int = 1) -> int:
    db = SessionLocal()
    try:
        product = db.get(DbProduct, product_id)
        order = DbOrder(
            instant=datetime.now(timezone.utc),
            client_id=client_id,
            delivery_address_id=address_id,
        )
        order.items = [
            DbOrderItem(product_id=product_id, quantity=quantity, price=product.price)
        ]
        db.add(order)
        db.commit()
        return order.id
    finally:
        db.close()


# =====================================================
# FLASK APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def fresh_schema():
    """Drop and recreate every table around the test."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def app(fresh_schema):
    from storefront.main import create_app

    flask_app = create_app()
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def db_session(fresh_schema):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =====================================================
# ACCOUNT FIXTURES
# =====================================================


@pytest.fixture
def city_id(fresh_schema) -> int:
    return create_city()


@pytest.fixture
def admin_account(city_id) -> dict:
    return create_account(
        "Admin Person", "admin@example.com", city_id, roles=(Role.ADMIN, Role.CLIENT)
    )


@pytest.fixture
def client_account(city_id) -> dict:
    return create_account("Maria Silva", "maria@example.com", city_id)


@pytest.fixture
def other_account(city_id) -> dict:
    return create_account("John Other", "john@example.com", city_id)


@pytest.fixture
def admin_token(admin_account) -> str:
    return create_client_token(admin_account["id"], admin_account["email"])


@pytest.fixture
def client_token(client_account) -> str:
    return create_client_token(client_account["id"], client_account["email"])


@pytest.fixture
def other_token(other_account) -> str:
    return create_client_token(other_account["id"], other_account["email"])
