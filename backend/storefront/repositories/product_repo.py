from typing import List

from sqlalchemy.orm import selectinload

from storefront.db.base import Category as DbCategory
from storefront.db.base import Product as DbProduct
from storefront.domain.entities import Category, Page, PageRequest
from storefront.domain.entities import Product as DomainProduct
from storefront.domain.interfaces import IProductRepository
from storefront.domain.results import StoreResult
from storefront.repositories.base_repository import SqlAlchemyRepository


def _escape_like(text: str) -> str:
    """Make LIKE wildcards in user text match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductRepository(SqlAlchemyRepository, IProductRepository):
    model = DbProduct
    entity_kind = "Product"
    sortable_fields = {"id": "id", "name": "name", "price": "price"}

    def find_by_id(self, product_id: int) -> StoreResult[DomainProduct]:
        db_product = (
            self.db.query(DbProduct)
            .options(selectinload(DbProduct.categories))
            .filter_by(id=product_id)
            .first()
        )
        if db_product is None:
            return StoreResult.not_found()
        return StoreResult.ok(self._to_domain(db_product))

    def search(
        self, name: str, category_ids: List[int], request: PageRequest
    ) -> StoreResult[Page[DomainProduct]]:
        query = self.db.query(DbProduct).options(selectinload(DbProduct.categories))
        if name:
            query = query.filter(
                DbProduct.name.ilike(f"%{_escape_like(name)}%", escape="\\")
            )
        if category_ids:
            query = query.filter(
                DbProduct.categories.any(DbCategory.id.in_(category_ids))
            )
        return self._page(query, request, self._to_domain)

    def _to_domain(self, db_product: DbProduct) -> DomainProduct:
        return DomainProduct(
            id=db_product.id,
            name=db_product.name,
            price=db_product.price,
            categories=[Category(id=c.id, name=c.name) for c in db_product.categories],
        )
