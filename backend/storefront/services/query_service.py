"""
Paginated, sorted reads shared by every listable entity.
"""

from typing import Callable, Generic, TypeVar

from storefront.core.exceptions import ValidationError
from storefront.domain.entities import Page, PageRequest
from storefront.domain.results import StoreResult
from storefront.services.error_translator import ErrorTranslator

E = TypeVar("E")
R = TypeVar("R")

DIRECTIONS = ("ASC", "DESC")

# Largest row offset the store can bind (signed 64-bit INTEGER)
MAX_ROW_OFFSET = 2**63 - 1


class PaginatedQueryService(Generic[E, R]):
    """Validates paging parameters, delegates the read and maps each row.

    Args:
        fetch_page: Repository callable taking a PageRequest
        mapper: Converts each entity to its external representation
        translator: Unwraps the repository result
        entity_kind: Name used in error messages
    """

    def __init__(
        self,
        fetch_page: Callable[[PageRequest], StoreResult[Page[E]]],
        mapper: Callable[[E], R],
        translator: ErrorTranslator,
        entity_kind: str,
    ) -> None:
        self.fetch_page = fetch_page
        self.mapper = mapper
        self.translator = translator
        self.entity_kind = entity_kind

    def find_page(
        self, page: int, lines_per_page: int, order_by: str, direction: str
    ) -> Page[R]:
        """Return one page of mapped rows.

        Raises:
            ValidationError: On a negative page, a size below 1, a page whose
                rows lie past MAX_ROW_OFFSET, a direction other than
                "ASC"/"DESC" (case sensitive) or an unknown sort field
        """
        request = self.build_request(page, lines_per_page, order_by, direction)
        result = self.fetch_page(request)
        entities = self.translator.unwrap(result, self.entity_kind)
        return entities.map(self.mapper)

    @staticmethod
    def build_request(
        page: int, lines_per_page: int, order_by: str, direction: str
    ) -> PageRequest:
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise ValidationError("page must be a non-negative integer", field="page")
        if (
            isinstance(lines_per_page, bool)
            or not isinstance(lines_per_page, int)
            or lines_per_page < 1
        ):
            raise ValidationError(
                "linesPerPage must be a positive integer", field="linesPerPage"
            )
        if (page + 1) * lines_per_page > MAX_ROW_OFFSET:
            raise ValidationError("page is out of range", field="page")
        if direction not in DIRECTIONS:
            raise ValidationError("direction must be ASC or DESC", field="direction")
        if not order_by:
            raise ValidationError("orderBy is required", field="orderBy")
        return PageRequest(
            page=page, size=lines_per_page, order_by=order_by, direction=direction
        )
