"""
Category controller for handling HTTP requests.

Reads are public; writes require the ADMIN role.
"""

from flask import Blueprint, jsonify

from storefront.core.api_utils import (
    created_response,
    get_json_body,
    no_content,
    page_args,
)
from storefront.core.auth_decorators import role_required
from storefront.core.config import get_default_lines_per_page
from storefront.db.session import SessionLocal
from storefront.domain.entities import Role
from storefront.repositories.category_repo import CategoryRepository
from storefront.schemas.dtos import CategoryDTO, page_to_json
from storefront.services.category_service import CategoryService
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

category_bp = Blueprint("categories", __name__, url_prefix="/categories")


def _category_json(category) -> dict:
    return CategoryDTO.from_domain(category).to_json()


def _build_service(db) -> CategoryService:
    repository = CategoryRepository(db)
    translator = ErrorTranslator()
    query_service = PaginatedQueryService(
        repository.find_page, _category_json, translator, "Category"
    )
    return CategoryService(repository, translator, query_service)


@category_bp.route("", methods=["GET"])
def find_all():
    db = SessionLocal()
    try:
        categories = _build_service(db).find_all()
        return jsonify([_category_json(c) for c in categories]), 200
    finally:
        db.close()


@category_bp.route("/page", methods=["GET"])
def find_page():
    db = SessionLocal()
    try:
        page = _build_service(db).find_page(
            **page_args("name", get_default_lines_per_page())
        )
        return jsonify(page_to_json(page)), 200
    finally:
        db.close()


@category_bp.route("/<int:category_id>", methods=["GET"])
def find(category_id: int):
    db = SessionLocal()
    try:
        category = _build_service(db).find(category_id)
        return jsonify(_category_json(category)), 200
    finally:
        db.close()


@category_bp.route("", methods=["POST"])
@role_required(Role.ADMIN)
def insert():
    dto = CategoryDTO.from_json(get_json_body())
    dto.validate()

    db = SessionLocal()
    try:
        service = _build_service(db)
        category = service.insert(service.from_dto(dto))
        return created_response(category.id)
    finally:
        db.close()


@category_bp.route("/<int:category_id>", methods=["PUT"])
@role_required(Role.ADMIN)
def update(category_id: int):
    dto = CategoryDTO.from_json(get_json_body())
    dto.validate()
    dto.id = category_id

    db = SessionLocal()
    try:
        service = _build_service(db)
        service.update(service.from_dto(dto))
        return no_content()
    finally:
        db.close()


@category_bp.route("/<int:category_id>", methods=["DELETE"])
@role_required(Role.ADMIN)
def delete(category_id: int):
    db = SessionLocal()
    try:
        _build_service(db).delete(category_id)
        return no_content()
    finally:
        db.close()
