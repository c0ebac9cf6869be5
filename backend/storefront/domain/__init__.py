"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository and collaborator contracts
- results.py: Typed results returned by repositories
"""

from .entities import (
    Address,
    Category,
    City,
    Client,
    ClientType,
    Order,
    OrderItem,
    Page,
    PageRequest,
    Principal,
    Product,
    Role,
    State,
)
from .interfaces import (
    ICategoryReader,
    ICategoryRepository,
    ICategoryWriter,
    IClientReader,
    IClientRepository,
    IClientWriter,
    IEmailDispatcher,
    IOrderRepository,
    IPasswordHasher,
    IPrincipalSource,
    IProductRepository,
)
from .results import StoreFailure, StoreResult

__all__ = [
    # Domain entities
    "Address",
    "Category",
    "City",
    "Client",
    "ClientType",
    "Order",
    "OrderItem",
    "Page",
    "PageRequest",
    "Principal",
    "Product",
    "Role",
    "State",
    # Repository interfaces
    "ICategoryRepository",
    "IClientRepository",
    "IOrderRepository",
    "IProductRepository",
    # Segregated interfaces
    "ICategoryReader",
    "ICategoryWriter",
    "IClientReader",
    "IClientWriter",
    # Collaborators
    "IEmailDispatcher",
    "IPasswordHasher",
    "IPrincipalSource",
    # Results
    "StoreFailure",
    "StoreResult",
]
