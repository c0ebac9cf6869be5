"""
Domain entities - Pure business logic, no framework dependencies.

This is the representation the services work with, independent of:
- Database implementation (SQLAlchemy)
- HTTP frameworks (Flask)
- External services
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, FrozenSet, Generic, List, Optional, Set, TypeVar

from storefront.core.exceptions import ValidationError

T = TypeVar("T")
R = TypeVar("R")


class Role(Enum):
    """Account roles. Codes are the values stored in the client_roles table."""

    ADMIN = (1, "ROLE_ADMIN")
    CLIENT = (2, "ROLE_CLIENT")

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code) -> "Role":
        for role in cls:
            if role.code == code:
                return role
        raise ValidationError(f"Invalid role code: {code}", field="role")


class ClientType(Enum):
    """Kind of account holder; decides how the tax id is interpreted."""

    INDIVIDUAL = (1, "Individual")
    COMPANY = (2, "Company")

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code) -> "ClientType":
        """Resolve a client type code.

        Raises:
            ValidationError: If the code maps to no known type
        """
        if isinstance(code, bool):
            raise ValidationError(f"Invalid client type code: {code}", field="type")
        for client_type in cls:
            if client_type.code == code:
                return client_type
        raise ValidationError(f"Invalid client type code: {code}", field="type")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller for one request. Never persisted."""

    id: int
    email: str = ""
    roles: FrozenSet[Role] = frozenset()

    def has_role(self, role: Role) -> bool:
        return role in self.roles


@dataclass
class State:
    id: Optional[int] = None
    name: str = ""


@dataclass
class City:
    """City reference. Address payloads only carry the id; the rest is
    resolved by the store."""

    id: Optional[int] = None
    name: Optional[str] = None
    state: Optional[State] = None


@dataclass
class Address:
    """Delivery/billing address owned by a client."""

    id: Optional[int] = None
    street: str = ""
    number: str = ""
    complement: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[City] = None
    # Back-reference only; excluded from repr/eq to avoid the client <-> address cycle
    client: Optional["Client"] = field(default=None, repr=False, compare=False)


@dataclass
class Client:
    """Domain entity representing a customer account."""

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    tax_id: Optional[str] = None
    client_type: Optional[ClientType] = None
    password_hash: Optional[str] = field(default=None, repr=False)
    phones: List[str] = field(default_factory=list)
    addresses: List[Address] = field(default_factory=list)
    roles: Set[Role] = field(default_factory=set)

    def add_phone(self, number: str) -> bool:
        """Append a phone number, keeping the collection duplicate-free.

        Returns:
            True if the number was added, False if it was already present
        """
        if number in self.phones:
            return False
        self.phones.append(number)
        return True

    def add_address(self, address: Address) -> None:
        address.client = self
        self.addresses.append(address)

    def add_role(self, role: Role) -> None:
        self.roles.add(role)

    def has_role(self, role: Role) -> bool:
        return role in self.roles


@dataclass
class Category:
    """Product category. Has no owner: readable by anyone."""

    id: Optional[int] = None
    name: str = ""


@dataclass
class Product:
    id: Optional[int] = None
    name: str = ""
    price: Decimal = Decimal("0.00")
    categories: List[Category] = field(default_factory=list)


@dataclass
class OrderItem:
    product_id: int = 0
    quantity: int = 0
    price: Decimal = Decimal("0.00")
    discount: Decimal = Decimal("0.00")
    product_name: Optional[str] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.quantity <= 0:
            raise ValidationError("Quantity must be positive", field="quantity")

    @property
    def subtotal(self) -> Decimal:
        return (self.price - self.discount) * self.quantity


@dataclass
class Order:
    """Customer order. Owner-scoped through client_id."""

    id: Optional[int] = None
    instant: Optional[datetime] = None
    client_id: Optional[int] = None
    delivery_address_id: Optional[int] = None
    items: List[OrderItem] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0.00"))


@dataclass(frozen=True)
class PageRequest:
    """Validated paging parameters handed to a repository."""

    page: int
    size: int
    order_by: str
    direction: str

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One page of a sorted collection."""

    content: List[T]
    total_elements: int
    number: int
    size: int
    order_by: str
    direction: str

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, mapper: Callable[[T], R]) -> "Page[R]":
        """Return the same page with every element passed through mapper."""
        return replace(self, content=[mapper(item) for item in self.content])
