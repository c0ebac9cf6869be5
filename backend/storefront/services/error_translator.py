"""
Turns repository StoreResults into values or service-layer exceptions.

Every StoreFailure maps to exactly one exception. Exceptions raised by the
store itself never reach this module: they propagate to the caller as
fatal errors.
"""

from typing import Optional, TypeVar

from storefront.core.exceptions import DataIntegrityConflict, NotFound, ValidationError
from storefront.domain.results import StoreFailure, StoreResult

T = TypeVar("T")

DEFAULT_CONFLICT_MESSAGE = "Operation violates data integrity"


class ErrorTranslator:
    def unwrap(
        self,
        result: StoreResult[T],
        entity_kind: str,
        entity_id=None,
        conflict_message: Optional[str] = None,
    ) -> T:
        """Return the result value or raise the matching error.

        Args:
            result: Repository outcome
            entity_kind: Entity name used in NotFound messages
            entity_id: Id the operation targeted, if any
            conflict_message: Message for DataIntegrityConflict; defaults to a
                generic one so driver text is never shown to callers
        """
        if result.is_ok:
            return result.value

        failure = result.failure
        if failure is StoreFailure.NOT_FOUND:
            raise NotFound(entity_kind, entity_id)
        elif failure is StoreFailure.INTEGRITY_VIOLATION:
            raise DataIntegrityConflict(conflict_message or DEFAULT_CONFLICT_MESSAGE)
        elif failure is StoreFailure.INVALID_SORT:
            raise ValidationError(result.detail or "Invalid sort field", field="orderBy")
        else:
            raise TypeError(f"Unhandled store failure: {failure!r}")
