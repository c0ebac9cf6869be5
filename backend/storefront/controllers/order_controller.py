"""
Order controller. Every route needs an authenticated caller; single-order
reads are further restricted to the order's client or an ADMIN.
"""

from flask import Blueprint, jsonify

from storefront.core.api_utils import created_response, get_json_body, page_args
from storefront.core.auth_decorators import FlaskPrincipalSource
from storefront.core.config import get_default_lines_per_page
from storefront.db.session import SessionLocal
from storefront.repositories.client_repo import ClientRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.dtos import OrderNewDTO, OrderResponse, page_to_json
from storefront.services.authorization import AuthorizationGuard
from storefront.services.email_service import build_email_dispatcher
from storefront.services.error_translator import ErrorTranslator
from storefront.services.order_service import OrderService

order_bp = Blueprint("orders", __name__, url_prefix="/orders")


def _order_json(order) -> dict:
    return OrderResponse.from_domain(order).to_json()


def _build_service(db) -> OrderService:
    return OrderService(
        OrderRepository(db),
        ProductRepository(db),
        ClientRepository(db),
        AuthorizationGuard(FlaskPrincipalSource()),
        ErrorTranslator(),
        build_email_dispatcher(),
        _order_json,
    )


@order_bp.route("", methods=["GET"])
def find_page():
    """The caller's own orders, newest first unless asked otherwise."""
    args = page_args("instant", get_default_lines_per_page(), "DESC")
    db = SessionLocal()
    try:
        page = _build_service(db).find_page(**args)
        return jsonify(page_to_json(page)), 200
    finally:
        db.close()


@order_bp.route("/<int:order_id>", methods=["GET"])
def find(order_id: int):
    db = SessionLocal()
    try:
        order = _build_service(db).find(order_id)
        return jsonify(_order_json(order)), 200
    finally:
        db.close()


@order_bp.route("", methods=["POST"])
def insert():
    dto = OrderNewDTO.from_json(get_json_body())
    dto.validate()

    db = SessionLocal()
    try:
        order = _build_service(db).insert(dto)
        return created_response(order.id)
    finally:
        db.close()
