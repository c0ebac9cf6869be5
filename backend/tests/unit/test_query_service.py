from unittest.mock import Mock

import pytest

from storefront.core.exceptions import ValidationError
from storefront.domain.entities import Category, Page, PageRequest
from storefront.domain.results import StoreResult
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import MAX_ROW_OFFSET, PaginatedQueryService


def _page(request: PageRequest, content, total) -> Page:
    return Page(
        content=content,
        total_elements=total,
        number=request.page,
        size=request.size,
        order_by=request.order_by,
        direction=request.direction,
    )


@pytest.fixture
def fetch_page():
    fetch = Mock()
    fetch.side_effect = lambda request: StoreResult.ok(
        _page(request, [Category(id=1, name="Books"), Category(id=2, name="Games")], 14)
    )
    return fetch


@pytest.fixture
def service(fetch_page):
    return PaginatedQueryService(
        fetch_page, lambda c: {"id": c.id, "name": c.name}, ErrorTranslator(), "Category"
    )


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.pagination
class TestPaginatedQueryService:
    def test_delegates_and_maps_rows(self, service, fetch_page):
        page = service.find_page(1, 12, "name", "ASC")

        fetch_page.assert_called_once_with(
            PageRequest(page=1, size=12, order_by="name", direction="ASC")
        )
        assert page.content == [{"id": 1, "name": "Books"}, {"id": 2, "name": "Games"}]
        assert page.total_elements == 14
        assert page.total_pages == 2
        assert page.number == 1
        assert page.last is True
        assert page.first is False

    def test_desc_is_accepted(self, service, fetch_page):
        service.find_page(0, 5, "id", "DESC")
        assert fetch_page.call_args[0][0].direction == "DESC"

    @pytest.mark.parametrize(
        "page,size,direction",
        [
            (-1, 12, "ASC"),
            (0, 0, "ASC"),
            (0, -5, "ASC"),
            (0, 12, "asc"),
            (0, 12, "desc"),
            (0, 12, "UP"),
            (0, 12, ""),
            (10**19, 12, "ASC"),
            (0, 2**63, "ASC"),
        ],
    )
    def test_rejects_bad_parameters_before_calling_the_store(
        self, service, fetch_page, page, size, direction
    ):
        with pytest.raises(ValidationError):
            service.find_page(page, size, "name", direction)
        fetch_page.assert_not_called()

    def test_unknown_sort_field_becomes_validation_error(self):
        fetch = Mock(return_value=StoreResult.invalid_sort("Cannot sort Category by 'x'"))
        service = PaginatedQueryService(fetch, lambda c: c, ErrorTranslator(), "Category")

        with pytest.raises(ValidationError) as exc_info:
            service.find_page(0, 12, "x", "ASC")
        assert "x" in exc_info.value.message

    def test_page_request_offset(self):
        request = PaginatedQueryService.build_request(3, 12, "name", "ASC")
        assert request.offset == 36

    def test_last_addressable_page_is_accepted(self):
        request = PaginatedQueryService.build_request(MAX_ROW_OFFSET - 1, 1, "name", "ASC")
        assert request.offset == MAX_ROW_OFFSET - 1
