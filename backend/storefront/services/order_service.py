"""
Order placement and owner-scoped order reads.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from storefront.core.exceptions import AuthorizationDenied, FieldValidationError
from storefront.domain.entities import Order, OrderItem, Page, Role
from storefront.domain.interfaces import (
    IClientRepository,
    IEmailDispatcher,
    IOrderRepository,
    IProductRepository,
)
from storefront.schemas.dtos import OrderNewDTO
from storefront.services.authorization import AuthorizationGuard
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

logger = logging.getLogger(__name__)

ENTITY_KIND = "Order"


class OrderService:
    def __init__(
        self,
        order_repo: IOrderRepository,
        product_repo: IProductRepository,
        client_repo: IClientRepository,
        guard: AuthorizationGuard,
        translator: ErrorTranslator,
        email_dispatcher: IEmailDispatcher,
        mapper: Callable[[Order], Any],
    ) -> None:
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.client_repo = client_repo
        self.guard = guard
        self.translator = translator
        self.email_dispatcher = email_dispatcher
        self.mapper = mapper

    def find(self, order_id: int) -> Order:
        """Get an order; only its client or an ADMIN may read it.

        Non-ADMIN callers get AuthorizationDenied for a missing order as
        well as for someone else's, so the answer never tells them whether
        the id exists.
        """
        principal = self.guard.require_principal()
        result = self.order_repo.find_by_id(order_id)
        if not result.is_ok and not principal.has_role(Role.ADMIN):
            logger.warning(
                "Order lookup denied",
                extra={"context": {"principal_id": principal.id, "order_id": order_id}},
            )
            raise AuthorizationDenied()
        order = self.translator.unwrap(result, ENTITY_KIND, order_id)
        self.guard.check(order.client_id)
        return order

    def find_page(
        self, page: int, lines_per_page: int, order_by: str, direction: str
    ) -> Page:
        """One page of the caller's own orders."""
        principal = self.guard.require_principal()
        query_service = PaginatedQueryService(
            lambda request: self.order_repo.find_page_by_client(principal.id, request),
            self.mapper,
            self.translator,
            ENTITY_KIND,
        )
        return query_service.find_page(page, lines_per_page, order_by, direction)

    def insert(self, dto: OrderNewDTO) -> Order:
        """Place an order for the caller.

        Business Rules:
        - The delivery address must be one of the caller's addresses
        - Items are priced from the stored products, never from the payload
        - Repeated products are merged into one item
        - A confirmation e-mail is dispatched after the commit
        """
        principal = self.guard.require_principal()
        client = self.translator.unwrap(
            self.client_repo.find_by_id(principal.id), "Client", principal.id
        )

        if dto.delivery_address_id not in {a.id for a in client.addresses}:
            raise FieldValidationError(
                [("deliveryAddressId", "Address does not belong to the client")]
            )

        quantities = OrderedDict()
        for product_id, quantity in dto.items:
            quantities[product_id] = quantities.get(product_id, 0) + quantity

        items = []
        for product_id, quantity in quantities.items():
            product = self.translator.unwrap(
                self.product_repo.find_by_id(product_id), "Product", product_id
            )
            items.append(
                OrderItem(
                    product_id=product.id,
                    quantity=quantity,
                    price=product.price,
                    discount=Decimal("0.00"),
                    product_name=product.name,
                )
            )

        order = Order(
            instant=datetime.now(timezone.utc),
            client_id=client.id,
            delivery_address_id=dto.delivery_address_id,
            items=items,
        )
        saved = self.translator.unwrap(self.order_repo.save(order), ENTITY_KIND)
        logger.info(
            "Order placed",
            extra={
                "context": {
                    "order_id": saved.id,
                    "client_id": client.id,
                    "items": len(saved.items),
                }
            },
        )

        self.email_dispatcher.send_order_confirmation(saved, client)
        return saved
