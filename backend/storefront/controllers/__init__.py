# Controllers package initialization
# This file makes the controllers directory a Python package
# and allows importing controller modules

from . import (
    auth_controller,
    category_controller,
    client_controller,
    health_controller,
    order_controller,
    product_controller,
)

__all__ = [
    "auth_controller",
    "category_controller",
    "client_controller",
    "health_controller",
    "order_controller",
    "product_controller",
]
