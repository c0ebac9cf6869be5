# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import (
    auth_service,
    authorization,
    category_service,
    client_builder,
    client_service,
    email_service,
    error_translator,
    order_service,
    product_service,
    query_service,
)

__all__ = [
    "auth_service",
    "authorization",
    "category_service",
    "client_builder",
    "client_service",
    "email_service",
    "error_translator",
    "order_service",
    "product_service",
    "query_service",
]
