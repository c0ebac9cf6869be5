from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.api_utils import api_response
from storefront.core.limiter_config import limiter
from storefront.core.logging_config import get_logger
from storefront.db.session import SessionLocal

health_bp = Blueprint("health", __name__)
logger = get_logger(__name__)


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health():
    """Liveness plus a trivial database round trip."""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed", extra={"context": {"error": str(e)}})
        return api_response(False, "Database unavailable", status_code=503)
    finally:
        db.close()
    return api_response(True, "ok", data={"database": "ok"})
