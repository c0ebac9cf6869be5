from typing import List

from storefront.db.base import Category as DbCategory
from storefront.domain.entities import Category as DomainCategory
from storefront.domain.entities import Page, PageRequest
from storefront.domain.interfaces import ICategoryRepository
from storefront.domain.results import StoreResult
from storefront.repositories.base_repository import SqlAlchemyRepository


class CategoryRepository(SqlAlchemyRepository, ICategoryRepository):
    """Repository for Category persistence operations."""

    model = DbCategory
    entity_kind = "Category"
    sortable_fields = {"id": "id", "name": "name"}

    def find_by_id(self, category_id: int) -> StoreResult[DomainCategory]:
        db_category = self._get_row(category_id)
        if db_category is None:
            return StoreResult.not_found()
        return StoreResult.ok(self._to_domain(db_category))

    def find_all(self) -> List[DomainCategory]:
        db_categories = self.db.query(DbCategory).order_by(DbCategory.id).all()
        return [self._to_domain(c) for c in db_categories]

    def find_page(self, request: PageRequest) -> StoreResult[Page[DomainCategory]]:
        return self._page(self.db.query(DbCategory), request, self._to_domain)

    def save(self, category: DomainCategory) -> StoreResult[DomainCategory]:
        if category.id is None:
            db_category = DbCategory(name=category.name)
            self.db.add(db_category)
        else:
            db_category = self._get_row(category.id)
            if db_category is None:
                return StoreResult.not_found()
            db_category.name = category.name

        self.db.commit()
        self.db.refresh(db_category)
        return StoreResult.ok(self._to_domain(db_category))

    def delete_by_id(self, category_id: int) -> StoreResult[None]:
        return self._delete(category_id)

    def _to_domain(self, db_category: DbCategory) -> DomainCategory:
        return DomainCategory(id=db_category.id, name=db_category.name)
