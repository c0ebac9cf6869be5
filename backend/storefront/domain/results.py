"""
Typed results returned by repositories.

Repositories report the failures the service layer knows how to handle
as values instead of raising driver exceptions, so translation is a
dispatch over StoreFailure rather than catch-by-type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StoreFailure(Enum):
    NOT_FOUND = "not_found"
    INTEGRITY_VIOLATION = "integrity_violation"
    INVALID_SORT = "invalid_sort"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[StoreFailure] = None
    detail: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def not_found(cls, detail: Optional[str] = None) -> "StoreResult[T]":
        return cls(failure=StoreFailure.NOT_FOUND, detail=detail)

    @classmethod
    def integrity_violation(cls, detail: Optional[str] = None) -> "StoreResult[T]":
        return cls(failure=StoreFailure.INTEGRITY_VIOLATION, detail=detail)

    @classmethod
    def invalid_sort(cls, detail: Optional[str] = None) -> "StoreResult[T]":
        return cls(failure=StoreFailure.INVALID_SORT, detail=detail)
