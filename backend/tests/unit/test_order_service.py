from decimal import Decimal

import pytest

from storefront.core.exceptions import (
    AuthorizationDenied,
    FieldValidationError,
    NotFound,
    ValidationError,
)
from storefront.domain.entities import (
    Address,
    Client,
    Order,
    OrderItem,
    Principal,
    Product,
    Role,
)
from storefront.domain.results import StoreResult
from storefront.schemas.dtos import OrderNewDTO
from storefront.services.authorization import AuthorizationGuard
from storefront.services.error_translator import ErrorTranslator
from storefront.services.order_service import OrderService
from tests.factories.repository_factories import (
    ClientRepositoryFactory,
    EmailDispatcherFactory,
    OrderRepositoryFactory,
    PrincipalSourceFactory,
    ProductRepositoryFactory,
)

MARIA = Principal(id=5, email="maria@example.com", roles=frozenset({Role.CLIENT}))
ADMIN = Principal(id=1, email="admin@example.com", roles=frozenset({Role.ADMIN}))


@pytest.fixture
def repos():
    client = Client(id=5, name="Maria Silva", email="maria@example.com")
    client.add_address(Address(id=9, street="Flowers", number="300"))

    client_repo = ClientRepositoryFactory.create_mock_full()
    client_repo.find_by_id.return_value = StoreResult.ok(client)

    product_repo = ProductRepositoryFactory.create_mock()
    products = {
        1: Product(id=1, name="Computer", price=Decimal("2000.00")),
        3: Product(id=3, name="Mouse", price=Decimal("80.00")),
    }
    product_repo.find_by_id.side_effect = lambda pid: (
        StoreResult.ok(products[pid]) if pid in products else StoreResult.not_found()
    )

    return {
        "order": OrderRepositoryFactory.create_mock(),
        "product": product_repo,
        "client": client_repo,
        "email": EmailDispatcherFactory.create(),
    }


def _service(repos, principal=MARIA) -> OrderService:
    return OrderService(
        repos["order"],
        repos["product"],
        repos["client"],
        AuthorizationGuard(PrincipalSourceFactory.create(principal)),
        ErrorTranslator(),
        repos["email"],
        lambda order: order.id,
    )


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.orders
class TestOrderServiceInsert:
    def test_items_are_priced_from_products_and_merged(self, repos):
        dto = OrderNewDTO(delivery_address_id=9, items=[(1, 1), (3, 2), (3, 1)])

        order = _service(repos).insert(dto)

        assert order.id == 55
        assert order.client_id == 5
        assert [(i.product_id, i.quantity, i.price) for i in order.items] == [
            (1, 1, Decimal("2000.00")),
            (3, 3, Decimal("80.00")),
        ]
        assert order.total == Decimal("2240.00")
        assert order.instant is not None

    def test_confirmation_email_is_dispatched(self, repos):
        order = _service(repos).insert(OrderNewDTO(delivery_address_id=9, items=[(1, 1)]))

        repos["email"].send_order_confirmation.assert_called_once()
        sent_order, sent_client = repos["email"].send_order_confirmation.call_args[0]
        assert sent_order is order
        assert sent_client.id == 5

    def test_foreign_address_is_rejected(self, repos):
        with pytest.raises(FieldValidationError):
            _service(repos).insert(OrderNewDTO(delivery_address_id=10, items=[(1, 1)]))
        repos["order"].save.assert_not_called()

    def test_unknown_product(self, repos):
        with pytest.raises(NotFound) as exc_info:
            _service(repos).insert(OrderNewDTO(delivery_address_id=9, items=[(8, 1)]))
        assert exc_info.value.entity_kind == "Product"

    def test_anonymous_caller_is_denied(self, repos):
        with pytest.raises(AuthorizationDenied):
            _service(repos, principal=None).insert(
                OrderNewDTO(delivery_address_id=9, items=[(1, 1)])
            )


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.orders
class TestOrderServiceFind:
    def _order(self, client_id):
        return Order(
            id=3,
            client_id=client_id,
            delivery_address_id=9,
            items=[OrderItem(product_id=1, quantity=1, price=Decimal("10.00"))],
        )

    def test_owner_reads_order(self, repos):
        repos["order"].find_by_id.return_value = StoreResult.ok(self._order(5))
        assert _service(repos).find(3).id == 3

    def test_admin_reads_any_order(self, repos):
        repos["order"].find_by_id.return_value = StoreResult.ok(self._order(6))
        assert _service(repos, principal=ADMIN).find(3).id == 3

    def test_other_client_is_denied(self, repos):
        repos["order"].find_by_id.return_value = StoreResult.ok(self._order(6))
        with pytest.raises(AuthorizationDenied):
            _service(repos).find(3)

    def test_missing_order_is_denied_to_non_admin(self, repos):
        repos["order"].find_by_id.return_value = StoreResult.not_found()
        with pytest.raises(AuthorizationDenied):
            _service(repos).find(404)

    def test_missing_order_is_not_found_for_admin(self, repos):
        repos["order"].find_by_id.return_value = StoreResult.not_found()
        with pytest.raises(NotFound):
            _service(repos, principal=ADMIN).find(404)

    def test_anonymous_is_denied_before_lookup(self, repos):
        with pytest.raises(AuthorizationDenied):
            _service(repos, principal=None).find(3)
        repos["order"].find_by_id.assert_not_called()

    def test_page_is_scoped_to_caller(self, repos):
        repos["order"].find_page_by_client.return_value = StoreResult.invalid_sort()

        with pytest.raises(ValidationError):
            _service(repos).find_page(0, 12, "bogus", "ASC")

        assert repos["order"].find_page_by_client.call_args[0][0] == 5
