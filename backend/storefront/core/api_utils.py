"""
Common API utilities for consistent request parsing and response formatting
across all controllers.
"""

import logging
import time
from typing import Any, List, Optional

from flask import jsonify, make_response, request

from storefront.core.exceptions import FieldValidationError, ServiceError, ValidationError

logger = logging.getLogger(__name__)


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized envelope for informational endpoints (health, auth actions).

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def error_body(status: int, error: str, message: str) -> dict:
    return {
        "timestamp": int(time.time() * 1000),
        "status": status,
        "error": error,
        "message": message,
        "path": request.path,
    }


def register_error_handlers(app) -> None:
    """Map every ServiceError subclass to its HTTP response.

    Exceptions outside the ServiceError hierarchy are left to Flask (500).
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(e: ServiceError):
        body = error_body(e.status_code, e.error, e.message)
        if isinstance(e, FieldValidationError):
            body["errors"] = e.to_list()

        logger.info(
            f"{type(e).__name__}: {e.message}",
            extra={
                "context": {
                    "path": request.path,
                    "method": request.method,
                    "status_code": e.status_code,
                }
            },
        )
        return jsonify(body), e.status_code


def created_response(entity_id: Any):
    """201 with a Location header pointing at the new resource."""
    response = make_response("", 201)
    response.headers["Location"] = f"{request.base_url.rstrip('/')}/{entity_id}"
    return response


def no_content():
    return "", 204


def get_json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text_param(value: Optional[str]) -> str:
    """Query-string value as text (None becomes "").

    Werkzeug has already percent-decoded `request.args`; decoding again
    would turn a literal "%41" into "A".
    """
    if value is None:
        return ""
    return value


def decode_int_list(value: Optional[str]) -> List[int]:
    """Parse a comma-separated id list such as "1,3,7".

    Raises:
        ValidationError: If any element is not an integer
    """
    if not value:
        return []
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"Invalid id list: {value}", field="categories")


def int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", field=name)


def page_args(
    default_order_by: str, default_lines_per_page: int, default_direction: str = "ASC"
) -> dict:
    """Read page, linesPerPage, orderBy and direction from the query string."""
    return {
        "page": int_arg("page", 0),
        "lines_per_page": int_arg("linesPerPage", default_lines_per_page),
        "order_by": request.args.get("orderBy", default_order_by),
        "direction": request.args.get("direction", default_direction),
    }
