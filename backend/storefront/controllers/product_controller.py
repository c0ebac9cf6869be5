from flask import Blueprint, jsonify, request

from storefront.core.api_utils import decode_int_list, page_args, text_param
from storefront.core.config import get_default_lines_per_page
from storefront.db.session import SessionLocal
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.dtos import ProductDTO, page_to_json
from storefront.services.error_translator import ErrorTranslator
from storefront.services.product_service import ProductService

product_bp = Blueprint("products", __name__, url_prefix="/products")


def _product_json(product) -> dict:
    return ProductDTO.from_domain(product).to_json()


def _build_service(db) -> ProductService:
    return ProductService(ProductRepository(db), ErrorTranslator(), _product_json)


@product_bp.route("", methods=["GET"])
def search():
    """Search products: ?name=&categories=1,3&page=&linesPerPage=&orderBy=&direction="""
    name = text_param(request.args.get("name"))
    category_ids = decode_int_list(request.args.get("categories"))

    db = SessionLocal()
    try:
        page = _build_service(db).search(
            name, category_ids, **page_args("name", get_default_lines_per_page())
        )
        return jsonify(page_to_json(page)), 200
    finally:
        db.close()


@product_bp.route("/<int:product_id>", methods=["GET"])
def find(product_id: int):
    db = SessionLocal()
    try:
        product = _build_service(db).find(product_id)
        return jsonify(_product_json(product)), 200
    finally:
        db.close()
