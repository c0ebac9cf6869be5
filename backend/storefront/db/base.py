from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


# ------------------- REFERENCE DATA -------------------
class State(Base):
    __tablename__ = "states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)

    def __repr__(self):
        return f"<State(id={self.id}, name='{self.name}')>"


class City(Base):
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    state_id: Mapped[int] = mapped_column(ForeignKey("states.id"), nullable=False)

    state: Mapped[State] = relationship(lazy="joined")

    def __repr__(self):
        return f"<City(id={self.id}, name='{self.name}')>"


# ------------------- CLIENTS -------------------
class Client(Base):
    """Customer account. Owns its addresses, phones and roles."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    tax_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    # ClientType code (1 = individual, 2 = company)
    client_type: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    addresses: Mapped[List["Address"]] = relationship(
        back_populates="client",
        cascade="all, delete-orphan",
        order_by="Address.id",
    )
    phones: Mapped[List["Phone"]] = relationship(
        cascade="all, delete-orphan", order_by="Phone.id"
    )
    roles: Mapped[List["ClientRole"]] = relationship(cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Client(id={self.id}, email='{self.email}')>"


class Phone(Base):
    __tablename__ = "phones"
    __table_args__ = (UniqueConstraint("client_id", "number", name="uq_phone_client"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(20), nullable=False)


class ClientRole(Base):
    __tablename__ = "client_roles"

    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), primary_key=True)
    # Role code (1 = admin, 2 = client)
    role: Mapped[int] = mapped_column(Integer, primary_key=True)


class Address(Base):
    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    street: Mapped[str] = mapped_column(String(120), nullable=False)
    number: Mapped[str] = mapped_column(String(20), nullable=False)
    complement: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    district: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id"), nullable=False, index=True
    )
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), nullable=False)

    client: Mapped[Client] = relationship(back_populates="addresses")
    city: Mapped[City] = relationship(lazy="joined")


# ------------------- CATALOG -------------------
# Owned by Product: deleting a category that still has products violates
# the foreign key instead of silently unlinking them.
product_category = Table(
    "product_category",
    Base.metadata,
    Column("product_id", ForeignKey("products.id"), primary_key=True),
    Column("category_id", ForeignKey("categories.id"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    categories: Mapped[List[Category]] = relationship(
        secondary=product_category, order_by="Category.id"
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


# ------------------- ORDERS -------------------
class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    instant: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # No relationship back to Client: deleting a client with orders must fail
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id"), nullable=False, index=True
    )
    delivery_address_id: Mapped[int] = mapped_column(
        ForeignKey("addresses.id"), nullable=False
    )

    items: Mapped[List["OrderItem"]] = relationship(
        cascade="all, delete-orphan", order_by="OrderItem.product_id"
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), primary_key=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id"), primary_key=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )

    product: Mapped[Product] = relationship(lazy="joined")
