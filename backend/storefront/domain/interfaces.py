"""
Abstract interfaces for repositories and collaborators following
Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import (
    Category,
    Client,
    Order,
    Page,
    PageRequest,
    Principal,
    Product,
)
from .results import StoreResult


class ICategoryReader(ABC):
    """Interface for category read operations."""

    @abstractmethod
    def find_by_id(self, category_id: int) -> StoreResult[Category]:
        """Get category by ID (NOT_FOUND when absent)."""
        pass

    @abstractmethod
    def find_all(self) -> List[Category]:
        """Get all categories."""
        pass

    @abstractmethod
    def find_page(self, request: PageRequest) -> StoreResult[Page[Category]]:
        """Get one sorted page of categories (INVALID_SORT on unknown field)."""
        pass


class ICategoryWriter(ABC):
    """Interface for category write operations."""

    @abstractmethod
    def save(self, category: Category) -> StoreResult[Category]:
        """Insert (no id) or update (id set) a category."""
        pass

    @abstractmethod
    def delete_by_id(self, category_id: int) -> StoreResult[None]:
        """Delete a category (NOT_FOUND / INTEGRITY_VIOLATION)."""
        pass


class ICategoryRepository(ICategoryReader, ICategoryWriter):
    """Complete category repository interface."""

    pass


class IClientReader(ABC):
    """Interface for client read operations."""

    @abstractmethod
    def find_by_id(self, client_id: int) -> StoreResult[Client]:
        """Get client by ID, addresses and phones loaded."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Client]:
        """Get client by e-mail, or None."""
        pass

    @abstractmethod
    def find_all(self) -> List[Client]:
        """Get all clients."""
        pass

    @abstractmethod
    def find_page(self, request: PageRequest) -> StoreResult[Page[Client]]:
        """Get one sorted page of clients."""
        pass


class IClientWriter(ABC):
    """Interface for client write operations."""

    @abstractmethod
    def save(self, client: Client) -> StoreResult[Client]:
        """Insert a client graph (cascading addresses and phones) or update
        the scalar fields of an existing one."""
        pass

    @abstractmethod
    def set_password_hash(self, client_id: int, password_hash: str) -> StoreResult[None]:
        """Replace the stored credential hash."""
        pass

    @abstractmethod
    def delete_by_id(self, client_id: int) -> StoreResult[None]:
        """Delete a client and its addresses in one transaction."""
        pass


class IClientRepository(IClientReader, IClientWriter):
    """Complete client repository interface combining read/write operations."""

    pass


class IProductRepository(ABC):
    """Interface for product read operations."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> StoreResult[Product]:
        pass

    @abstractmethod
    def search(
        self, name: str, category_ids: List[int], request: PageRequest
    ) -> StoreResult[Page[Product]]:
        """Products whose name contains `name` and that belong to any of
        the given categories."""
        pass


class IOrderRepository(ABC):
    """Interface for order persistence."""

    @abstractmethod
    def find_by_id(self, order_id: int) -> StoreResult[Order]:
        pass

    @abstractmethod
    def find_page_by_client(
        self, client_id: int, request: PageRequest
    ) -> StoreResult[Page[Order]]:
        pass

    @abstractmethod
    def save(self, order: Order) -> StoreResult[Order]:
        """Insert an order with its items in one transaction."""
        pass


class IPasswordHasher(ABC):
    """One-way credential transform."""

    @abstractmethod
    def hash(self, raw: str) -> str:
        pass

    @abstractmethod
    def verify(self, raw: str, hashed: str) -> bool:
        pass


class IPrincipalSource(ABC):
    """Resolves the authenticated caller of the current request."""

    @abstractmethod
    def current(self) -> Optional[Principal]:
        """Return the caller, or None when the request is anonymous."""
        pass


class IEmailDispatcher(ABC):
    """Fire-and-forget outbound e-mail."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> None:
        pass

    @abstractmethod
    def send_order_confirmation(self, order: Order, client: Client) -> None:
        pass

    @abstractmethod
    def send_new_password(self, client: Client, new_password: str) -> None:
        pass
