"""
Authentication helpers for the JSON API.

Callers authenticate with a Bearer JWT in the Authorization header. The
Flask-Login request_loader (see `load_principal_from_request`) turns the
token into a LoginPrincipal for the duration of one request; there are no
sessions or cookies.

DECORATOR GUIDE:
- @login_required (flask_login): route needs any authenticated caller; 401 otherwise
- @role_required(Role.ADMIN): route needs a role; 403 otherwise

Owner-scoped routes (clients, orders) carry no decorator: the services
run the owner-or-ADMIN check through AuthorizationGuard.

Examples:
    @category_bp.route("", methods=["POST"])
    @role_required(Role.ADMIN)
    def insert():
        ...
"""

import logging
from functools import wraps
from typing import Optional

from flask_login import UserMixin, current_user

from storefront.core.exceptions import AuthorizationDenied
from storefront.core.security import get_client_id_from_token
from storefront.domain.entities import Principal, Role
from storefront.domain.interfaces import IPrincipalSource

logger = logging.getLogger(__name__)


class LoginPrincipal(UserMixin):
    """Flask-Login user object wrapping the request's Principal."""

    def __init__(self, principal: Principal) -> None:
        self.principal = principal
        self.id = principal.id
        self.email = principal.email


def load_principal_from_request(request) -> Optional[LoginPrincipal]:
    """Resolve the Bearer token on `request` to a LoginPrincipal.

    Roles and e-mail come from the stored client, not from the token, so a
    deleted or demoted account loses access immediately.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None

    client_id = get_client_id_from_token(auth_header.split(" ", 1)[1].strip())
    if client_id is None:
        return None

    from storefront.db.session import SessionLocal
    from storefront.repositories.client_repo import ClientRepository

    db = SessionLocal()
    try:
        result = ClientRepository(db).find_by_id(client_id)
    finally:
        db.close()

    if not result.is_ok:
        logger.info(
            "Token for unknown client", extra={"context": {"client_id": client_id}}
        )
        return None

    client = result.value
    return LoginPrincipal(
        Principal(id=client.id, email=client.email, roles=frozenset(client.roles))
    )


def get_current_principal() -> Optional[Principal]:
    """Return the authenticated caller of the current request, or None."""
    if current_user and getattr(current_user, "is_authenticated", False):
        return getattr(current_user, "principal", None)
    return None


class FlaskPrincipalSource(IPrincipalSource):
    """Principal source bound to the Flask-Login request context."""

    def current(self) -> Optional[Principal]:
        return get_current_principal()


def role_required(role: Role):
    """Decorator restricting a route to callers holding `role`.

    Raises AuthorizationDenied (403) for anonymous callers and for callers
    without the role.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            principal = get_current_principal()
            if principal is None or not principal.has_role(role):
                logger.warning(
                    "Role check failed",
                    extra={
                        "context": {
                            "required_role": role.description,
                            "principal_id": principal.id if principal else None,
                        }
                    },
                )
                raise AuthorizationDenied()
            return f(*args, **kwargs)

        return decorated_function

    return decorator
