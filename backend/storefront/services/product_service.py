from typing import Any, Callable, List

from storefront.domain.entities import Page, Product
from storefront.domain.interfaces import IProductRepository
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

ENTITY_KIND = "Product"


class ProductService:
    """Public catalog reads."""

    def __init__(
        self,
        repo: IProductRepository,
        translator: ErrorTranslator,
        mapper: Callable[[Product], Any],
    ) -> None:
        self.repo = repo
        self.translator = translator
        self.mapper = mapper

    def find(self, product_id: int) -> Product:
        return self.translator.unwrap(
            self.repo.find_by_id(product_id), ENTITY_KIND, product_id
        )

    def search(
        self,
        name: str,
        category_ids: List[int],
        page: int,
        lines_per_page: int,
        order_by: str,
        direction: str,
    ) -> Page:
        """Products whose name contains `name`, restricted to the given
        categories when any are given."""
        query_service = PaginatedQueryService(
            lambda request: self.repo.search(name, category_ids, request),
            self.mapper,
            self.translator,
            ENTITY_KIND,
        )
        return query_service.find_page(page, lines_per_page, order_by, direction)
