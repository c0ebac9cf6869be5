from decimal import Decimal

from sqlalchemy.orm import selectinload

from storefront.db.base import Order as DbOrder
from storefront.db.base import OrderItem as DbOrderItem
from storefront.domain.entities import Order as DomainOrder
from storefront.domain.entities import OrderItem, Page, PageRequest
from storefront.domain.interfaces import IOrderRepository
from storefront.domain.results import StoreResult
from storefront.repositories.base_repository import SqlAlchemyRepository


class OrderRepository(SqlAlchemyRepository, IOrderRepository):
    model = DbOrder
    entity_kind = "Order"
    sortable_fields = {"id": "id", "instant": "instant"}

    def _query(self):
        return self.db.query(DbOrder).options(selectinload(DbOrder.items))

    def find_by_id(self, order_id: int) -> StoreResult[DomainOrder]:
        db_order = self._query().filter_by(id=order_id).first()
        if db_order is None:
            return StoreResult.not_found()
        return StoreResult.ok(self._to_domain(db_order))

    def find_page_by_client(
        self, client_id: int, request: PageRequest
    ) -> StoreResult[Page[DomainOrder]]:
        query = self._query().filter(DbOrder.client_id == client_id)
        return self._page(query, request, self._to_domain)

    def save(self, order: DomainOrder) -> StoreResult[DomainOrder]:
        """Insert an order and its items in one commit."""
        db_order = DbOrder(
            instant=order.instant,
            client_id=order.client_id,
            delivery_address_id=order.delivery_address_id,
        )
        db_order.items = [
            DbOrderItem(
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price,
                discount=item.discount,
            )
            for item in order.items
        ]
        self.db.add(db_order)
        self.db.commit()
        return self.find_by_id(db_order.id)

    def _to_domain(self, db_order: DbOrder) -> DomainOrder:
        return DomainOrder(
            id=db_order.id,
            instant=db_order.instant,
            client_id=db_order.client_id,
            delivery_address_id=db_order.delivery_address_id,
            items=[
                OrderItem(
                    product_id=db_item.product_id,
                    quantity=db_item.quantity,
                    price=Decimal(db_item.price),
                    discount=Decimal(db_item.discount or 0),
                    product_name=db_item.product.name if db_item.product else None,
                )
                for db_item in db_order.items
            ],
        )
