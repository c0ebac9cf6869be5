"""
Authentication endpoints: JWT login, token refresh and password reset.
"""

from flask import Blueprint, jsonify
from flask_login import login_required

from storefront.core.api_utils import api_response, get_json_body
from storefront.core.auth_decorators import get_current_principal
from storefront.core.limiter_config import AUTH_RATE_LIMIT, limiter
from storefront.core.security import BcryptPasswordHasher
from storefront.db.session import SessionLocal
from storefront.repositories.client_repo import ClientRepository
from storefront.schemas.dtos import CredentialsDTO, EmailDTO
from storefront.services.auth_service import AuthService
from storefront.services.email_service import build_email_dispatcher
from storefront.services.error_translator import ErrorTranslator

auth_bp = Blueprint("auth", __name__)


def _build_service(db) -> AuthService:
    return AuthService(
        ClientRepository(db),
        BcryptPasswordHasher(),
        build_email_dispatcher(),
        ErrorTranslator(),
    )


def _token_response(token: str, body: dict):
    response = jsonify(body)
    response.headers["Authorization"] = f"Bearer {token}"
    response.headers["Access-Control-Expose-Headers"] = "Authorization"
    return response, 200


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(AUTH_RATE_LIMIT)
def login():
    """Exchange e-mail and password for an access token."""
    credentials = CredentialsDTO.from_json(get_json_body())

    db = SessionLocal()
    try:
        client, token = _build_service(db).login(credentials.email, credentials.password)
        return _token_response(
            token,
            {
                "access_token": token,
                "token_type": "bearer",
                "client": {"id": client.id, "name": client.name, "email": client.email},
            },
        )
    finally:
        db.close()


@auth_bp.route("/auth/refresh_token", methods=["POST"])
@login_required
def refresh_token():
    db = SessionLocal()
    try:
        token = _build_service(db).refresh_token(get_current_principal())
        return _token_response(token, {"access_token": token, "token_type": "bearer"})
    finally:
        db.close()


@auth_bp.route("/auth/forgot", methods=["POST"])
@limiter.limit(AUTH_RATE_LIMIT)
def forgot():
    """Generate a new password and e-mail it to the account holder."""
    dto = EmailDTO.from_json(get_json_body())
    dto.validate()

    db = SessionLocal()
    try:
        _build_service(db).send_new_password(dto.email)
        return api_response(True, "A new password was sent to your e-mail")
    finally:
        db.close()
