"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs are built from decoded JSON bodies with `from_json` and
checked with `validate()`, which raises FieldValidationError listing
every offending field. Response DTOs are built from domain entities with
`from_domain` and serialized with `to_json`.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from storefront.core.exceptions import FieldValidationError
from storefront.domain.entities import Category, Client, Order, Page, Product

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value).strip()


def _int(data: Dict[str, Any], key: str) -> Any:
    """Return an int when the value is integral, otherwise the raw value so
    validate() can report it."""
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return value


class _Errors:
    """Collects (field, message) pairs and raises them together."""

    def __init__(self):
        self.items: List[Tuple[str, str]] = []

    def required(self, value: Any, field_name: str) -> bool:
        if value is None or (isinstance(value, str) and value == ""):
            self.items.append((field_name, "Required field"))
            return False
        return True

    def length(self, value: Optional[str], field_name: str, low: int, high: int):
        if value and not (low <= len(value) <= high):
            self.items.append(
                (field_name, f"Length must be between {low} and {high} characters")
            )

    def email(self, value: Optional[str], field_name: str = "email"):
        if value and not EMAIL_PATTERN.match(value):
            self.items.append((field_name, "Invalid e-mail"))

    def integer(self, value: Any, field_name: str):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            self.items.append((field_name, "Must be an integer"))

    def string(self, value: Any, field_name: str):
        if value is not None and not isinstance(value, str):
            self.items.append((field_name, "Must be a string"))

    def add(self, field_name: str, message: str):
        self.items.append((field_name, message))

    def raise_if_any(self):
        if self.items:
            raise FieldValidationError(self.items)


# ------------------- CATEGORIES -------------------


@dataclass
class CategoryDTO:
    """Category payload, used for requests and responses alike."""

    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CategoryDTO":
        return cls(id=_int(data, "id"), name=_text(data, "name"))

    def validate(self) -> None:
        errors = _Errors()
        if errors.required(self.name, "name"):
            errors.length(self.name, "name", 5, 80)
        errors.raise_if_any()

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryDTO":
        return cls(id=category.id, name=category.name)

    def to_json(self) -> dict:
        return {"id": self.id, "name": self.name}


# ------------------- CLIENTS -------------------


@dataclass
class ClientDTO:
    """Update payload and list representation of a client: id, name, email."""

    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ClientDTO":
        return cls(id=_int(data, "id"), name=_text(data, "name"), email=_text(data, "email"))

    def validate(self) -> None:
        errors = _Errors()
        if errors.required(self.name, "name"):
            errors.length(self.name, "name", 5, 120)
        if errors.required(self.email, "email"):
            errors.email(self.email)
        errors.raise_if_any()

    @classmethod
    def from_domain(cls, client: Client) -> "ClientDTO":
        return cls(id=client.id, name=client.name, email=client.email)

    def to_json(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass
class ClientNewDTO:
    """Registration payload: the client, its first address and its phones.

    `extra_phones` holds only the optional phones that were actually
    supplied, in input order.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    tax_id: Optional[str] = None
    type: Any = None
    password: Optional[str] = None
    phone1: Optional[str] = None
    extra_phones: Tuple[str, ...] = ()
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    city_id: Any = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ClientNewDTO":
        # Address fields are accepted flat or nested under "address"
        address = data.get("address") if isinstance(data.get("address"), dict) else data
        extra = []
        for key in ("phone2", "phone3"):
            phone = _text(data, key)
            if phone:
                extra.append(phone)
        city_id = _int(address, "cityId")
        if city_id is None and isinstance(address.get("city"), (int, str)):
            city_id = _int(address, "city")

        return cls(
            name=_text(data, "name"),
            email=_text(data, "email"),
            tax_id=_text(data, "taxId"),
            type=_int(data, "type"),
            password=data.get("password"),
            phone1=_text(data, "phone1"),
            extra_phones=tuple(extra),
            street=_text(address, "street"),
            number=_text(address, "number"),
            complement=_text(address, "complement"),
            district=_text(address, "district"),
            postal_code=_text(address, "postalCode"),
            city_id=city_id,
        )

    def validate(self) -> None:
        errors = _Errors()
        if errors.required(self.name, "name"):
            errors.length(self.name, "name", 5, 120)
        if errors.required(self.email, "email"):
            errors.email(self.email)
        errors.required(self.tax_id, "taxId")
        if errors.required(self.type, "type"):
            errors.integer(self.type, "type")
        if errors.required(self.password, "password"):
            errors.string(self.password, "password")
        errors.required(self.phone1, "phone1")
        errors.required(self.street, "street")
        errors.required(self.number, "number")
        if errors.required(self.city_id, "cityId"):
            errors.integer(self.city_id, "cityId")
        errors.raise_if_any()


@dataclass
class ClientResponse:
    """Full client representation returned by single-client lookups."""

    id: int
    name: str
    email: str
    tax_id: Optional[str]
    type: Optional[int]
    phones: List[str]
    addresses: List[dict]

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            tax_id=client.tax_id,
            type=client.client_type.code if client.client_type else None,
            phones=list(client.phones),
            addresses=[
                {
                    "id": a.id,
                    "street": a.street,
                    "number": a.number,
                    "complement": a.complement,
                    "district": a.district,
                    "postalCode": a.postal_code,
                    "city": {
                        "id": a.city.id if a.city else None,
                        "name": a.city.name if a.city else None,
                        "state": (
                            {"id": a.city.state.id, "name": a.city.state.name}
                            if a.city and a.city.state
                            else None
                        ),
                    },
                }
                for a in client.addresses
            ],
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "taxId": self.tax_id,
            "type": self.type,
            "phones": self.phones,
            "addresses": self.addresses,
        }


# ------------------- CATALOG -------------------


@dataclass
class ProductDTO:
    id: int
    name: str
    price: Decimal
    categories: List[dict] = field(default_factory=list)

    @classmethod
    def from_domain(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            categories=[{"id": c.id, "name": c.name} for c in product.categories],
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": float(self.price),
            "categories": self.categories,
        }


# ------------------- ORDERS -------------------


@dataclass
class OrderNewDTO:
    """Order placement payload. The client is always the caller."""

    delivery_address_id: Any = None
    items: List[Tuple[Any, Any]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "OrderNewDTO":
        raw_items = data.get("items")
        items = []
        if isinstance(raw_items, list):
            for raw in raw_items:
                if isinstance(raw, dict):
                    items.append((_int(raw, "productId"), _int(raw, "quantity")))
        return cls(delivery_address_id=_int(data, "deliveryAddressId"), items=items)

    def validate(self) -> None:
        errors = _Errors()
        if errors.required(self.delivery_address_id, "deliveryAddressId"):
            errors.integer(self.delivery_address_id, "deliveryAddressId")
        if not self.items:
            errors.add("items", "At least one item is required")
        for index, (product_id, quantity) in enumerate(self.items):
            if errors.required(product_id, f"items[{index}].productId"):
                errors.integer(product_id, f"items[{index}].productId")
            if errors.required(quantity, f"items[{index}].quantity"):
                errors.integer(quantity, f"items[{index}].quantity")
                if isinstance(quantity, int) and not isinstance(quantity, bool) and quantity <= 0:
                    errors.add(f"items[{index}].quantity", "Must be positive")
        errors.raise_if_any()


@dataclass
class OrderResponse:
    id: int
    instant: Optional[datetime]
    client_id: int
    delivery_address_id: int
    items: List[dict]
    total: Decimal

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            instant=order.instant,
            client_id=order.client_id,
            delivery_address_id=order.delivery_address_id,
            items=[
                {
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "quantity": item.quantity,
                    "price": float(item.price),
                    "discount": float(item.discount),
                    "subtotal": float(item.subtotal),
                }
                for item in order.items
            ],
            total=order.total,
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "instant": self.instant.isoformat() if self.instant else None,
            "clientId": self.client_id,
            "deliveryAddressId": self.delivery_address_id,
            "items": self.items,
            "total": float(self.total),
        }


# ------------------- AUTH -------------------


@dataclass
class CredentialsDTO:
    email: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CredentialsDTO":
        return cls(email=_text(data, "email"), password=data.get("password"))


@dataclass
class EmailDTO:
    email: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "EmailDTO":
        return cls(email=_text(data, "email"))

    def validate(self) -> None:
        errors = _Errors()
        if errors.required(self.email, "email"):
            errors.email(self.email)
        errors.raise_if_any()


# ------------------- PAGES -------------------


def page_to_json(page: Page) -> dict:
    """Serialize a page whose content is already JSON-ready."""
    return {
        "content": page.content,
        "totalElements": page.total_elements,
        "totalPages": page.total_pages,
        "number": page.number,
        "size": page.size,
        "numberOfElements": len(page.content),
        "first": page.first,
        "last": page.last,
        "sort": {"orderBy": page.order_by, "direction": page.direction},
    }
