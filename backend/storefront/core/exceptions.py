"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every recoverable failure raised by the service layer derives from
ServiceError; the Flask error handlers registered in api_utils turn each
subclass into its HTTP response. Anything else is treated as fatal.
"""

from typing import List, Optional, Tuple


class ServiceError(Exception):
    """Base class for recoverable service-layer errors."""

    status_code = 500
    error = "Internal error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed client input detected locally (pagination, codes, sort fields)."""

    status_code = 400
    error = "Bad request"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class FieldValidationError(ValidationError):
    """Payload validation failure carrying one message per offending field."""

    status_code = 422
    error = "Validation error"

    def __init__(self, errors: List[Tuple[str, str]]):
        super().__init__("Validation error")
        self.errors = list(errors)

    def to_list(self) -> List[dict]:
        return [
            {"fieldName": field_name, "message": message}
            for field_name, message in self.errors
        ]


class AuthenticationFailed(ServiceError):
    """Credentials were missing or did not match."""

    status_code = 401
    error = "Unauthorized"


class AuthorizationDenied(ServiceError):
    """The caller is not allowed to touch the requested entity."""

    status_code = 403
    error = "Access denied"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFound(ServiceError):
    """No entity of the given kind exists at the given id."""

    status_code = 404
    error = "Not found"

    def __init__(self, entity_kind: str, entity_id):
        super().__init__(f"Object not found! Id: {entity_id}, Type: {entity_kind}")
        self.entity_kind = entity_kind
        self.entity_id = entity_id


class DataIntegrityConflict(ServiceError):
    """A delete was blocked because other rows still reference the entity."""

    status_code = 409
    error = "Data integrity"
