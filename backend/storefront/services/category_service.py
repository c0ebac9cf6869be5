from typing import List

from storefront.domain.entities import Category, Page
from storefront.domain.interfaces import ICategoryRepository
from storefront.schemas.dtos import CategoryDTO
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

ENTITY_KIND = "Category"


class CategoryService:
    """Application service for category use-cases.

    Categories have no owner, so no authorization guard is involved here;
    the ADMIN-only write routes are gated at the controller.
    """

    def __init__(
        self,
        repo: ICategoryRepository,
        translator: ErrorTranslator,
        query_service: PaginatedQueryService,
    ) -> None:
        self.repo = repo
        self.translator = translator
        self.query_service = query_service

    def find(self, category_id: int) -> Category:
        return self.translator.unwrap(
            self.repo.find_by_id(category_id), ENTITY_KIND, category_id
        )

    def find_all(self) -> List[Category]:
        return self.repo.find_all()

    def find_page(
        self, page: int, lines_per_page: int, order_by: str, direction: str
    ) -> Page:
        return self.query_service.find_page(page, lines_per_page, order_by, direction)

    def insert(self, category: Category) -> Category:
        # Ids are assigned by the store
        category.id = None
        return self.translator.unwrap(self.repo.save(category), ENTITY_KIND)

    def update(self, category: Category) -> Category:
        """Re-read the stored category and copy only its name."""
        existing = self.find(category.id)
        existing.name = category.name
        return self.translator.unwrap(
            self.repo.save(existing), ENTITY_KIND, category.id
        )

    def delete(self, category_id: int) -> None:
        self.translator.unwrap(
            self.repo.delete_by_id(category_id),
            ENTITY_KIND,
            category_id,
            conflict_message="Cannot delete a category that has products",
        )

    def from_dto(self, dto: CategoryDTO) -> Category:
        return Category(id=dto.id, name=dto.name)
