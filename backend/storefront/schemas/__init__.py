"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the API contracts
and handle request validation.
"""

from .dtos import (
    CategoryDTO,
    ClientDTO,
    ClientNewDTO,
    ClientResponse,
    CredentialsDTO,
    EmailDTO,
    OrderNewDTO,
    OrderResponse,
    ProductDTO,
    page_to_json,
)

__all__ = [
    # Category DTOs
    "CategoryDTO",
    # Client DTOs
    "ClientDTO",
    "ClientNewDTO",
    "ClientResponse",
    # Catalog and order DTOs
    "ProductDTO",
    "OrderNewDTO",
    "OrderResponse",
    # Auth DTOs
    "CredentialsDTO",
    "EmailDTO",
    # Helpers
    "page_to_json",
]
