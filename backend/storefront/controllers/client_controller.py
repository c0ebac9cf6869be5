"""
Client controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Composes the guard, builder, query service and translator per request
- Leaves owner-or-ADMIN checks to ClientService
"""

from flask import Blueprint, jsonify, request

from storefront.core.api_utils import (
    created_response,
    get_json_body,
    no_content,
    page_args,
    text_param,
)
from storefront.core.auth_decorators import FlaskPrincipalSource, role_required
from storefront.core.config import get_default_lines_per_page
from storefront.core.exceptions import ValidationError
from storefront.core.security import BcryptPasswordHasher
from storefront.db.session import SessionLocal
from storefront.domain.entities import Role
from storefront.repositories.client_repo import ClientRepository
from storefront.schemas.dtos import ClientDTO, ClientNewDTO, ClientResponse, page_to_json
from storefront.services.authorization import AuthorizationGuard
from storefront.services.client_builder import ClientGraphBuilder
from storefront.services.client_service import ClientService
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

client_bp = Blueprint("clients", __name__, url_prefix="/clients")


def _client_summary(client) -> dict:
    return ClientDTO.from_domain(client).to_json()


def _build_service(db) -> ClientService:
    repository = ClientRepository(db)
    translator = ErrorTranslator()
    return ClientService(
        repository,
        AuthorizationGuard(FlaskPrincipalSource()),
        ClientGraphBuilder(BcryptPasswordHasher()),
        translator,
        PaginatedQueryService(
            repository.find_page, _client_summary, translator, "Client"
        ),
    )


@client_bp.route("", methods=["GET"])
@role_required(Role.ADMIN)
def find_all():
    db = SessionLocal()
    try:
        clients = _build_service(db).find_all()
        return jsonify([_client_summary(c) for c in clients]), 200
    finally:
        db.close()


@client_bp.route("/page", methods=["GET"])
@role_required(Role.ADMIN)
def find_page():
    db = SessionLocal()
    try:
        page = _build_service(db).find_page(
            **page_args("name", get_default_lines_per_page())
        )
        return jsonify(page_to_json(page)), 200
    finally:
        db.close()


@client_bp.route("/<int:client_id>", methods=["GET"])
def find(client_id: int):
    db = SessionLocal()
    try:
        client = _build_service(db).find(client_id)
        return jsonify(ClientResponse.from_domain(client).to_json()), 200
    finally:
        db.close()


@client_bp.route("/email", methods=["GET"])
def find_by_email():
    email = text_param(request.args.get("value")).strip()
    if not email:
        raise ValidationError("value is required", field="value")

    db = SessionLocal()
    try:
        client = _build_service(db).find_by_email(email)
        return jsonify(ClientResponse.from_domain(client).to_json()), 200
    finally:
        db.close()


@client_bp.route("", methods=["POST"])
def insert():
    """Public registration: client, first address and phones."""
    dto = ClientNewDTO.from_json(get_json_body())
    dto.validate()

    db = SessionLocal()
    try:
        client = _build_service(db).insert(dto)
        return created_response(client.id)
    finally:
        db.close()


@client_bp.route("/<int:client_id>", methods=["PUT"])
def update(client_id: int):
    dto = ClientDTO.from_json(get_json_body())
    dto.validate()
    dto.id = client_id

    db = SessionLocal()
    try:
        _build_service(db).update(dto)
        return no_content()
    finally:
        db.close()


@client_bp.route("/<int:client_id>", methods=["DELETE"])
def delete(client_id: int):
    db = SessionLocal()
    try:
        _build_service(db).delete(client_id)
        return no_content()
    finally:
        db.close()
