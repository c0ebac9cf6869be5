import pytest

from storefront.core.exceptions import (
    DataIntegrityConflict,
    NotFound,
    ServiceError,
    ValidationError,
)
from storefront.domain.results import StoreFailure, StoreResult
from storefront.services.error_translator import ErrorTranslator


@pytest.fixture
def translator():
    return ErrorTranslator()


@pytest.mark.unit
@pytest.mark.services
class TestErrorTranslator:
    def test_ok_returns_value(self, translator):
        assert translator.unwrap(StoreResult.ok("value"), "Client", 1) == "value"

    def test_ok_without_value(self, translator):
        assert translator.unwrap(StoreResult.ok(), "Client", 1) is None

    def test_not_found(self, translator):
        with pytest.raises(NotFound) as exc_info:
            translator.unwrap(StoreResult.not_found(), "Client", 42)

        error = exc_info.value
        assert error.entity_kind == "Client"
        assert error.entity_id == 42
        assert error.message == "Object not found! Id: 42, Type: Client"

    def test_integrity_violation_uses_given_message(self, translator):
        with pytest.raises(DataIntegrityConflict) as exc_info:
            translator.unwrap(
                StoreResult.integrity_violation("FOREIGN KEY constraint failed"),
                "Client",
                1,
                conflict_message="Cannot delete because there are related orders",
            )
        assert exc_info.value.message == "Cannot delete because there are related orders"

    def test_integrity_violation_hides_driver_text(self, translator):
        with pytest.raises(DataIntegrityConflict) as exc_info:
            translator.unwrap(
                StoreResult.integrity_violation("FOREIGN KEY constraint failed"),
                "Category",
                1,
            )
        assert "FOREIGN KEY" not in exc_info.value.message

    def test_invalid_sort(self, translator):
        with pytest.raises(ValidationError) as exc_info:
            translator.unwrap(StoreResult.invalid_sort("bad field"), "Category")
        assert exc_info.value.field == "orderBy"

    @pytest.mark.parametrize("failure", list(StoreFailure))
    def test_every_failure_maps_to_a_service_error(self, translator, failure):
        with pytest.raises(ServiceError):
            translator.unwrap(StoreResult(failure=failure), "Client", 1)
