"""
Owner-or-ADMIN access rule for owner-scoped entities.

`authorize` is a pure function of the caller and the owner id, so it can
be tested without a request context. `AuthorizationGuard` binds it to a
principal source for use inside services.
"""

import logging
from typing import Optional

from storefront.core.exceptions import AuthorizationDenied
from storefront.domain.entities import Principal, Role
from storefront.domain.interfaces import IPrincipalSource

logger = logging.getLogger(__name__)


def authorize(principal: Optional[Principal], target_owner_id: int) -> None:
    """Allow when the caller is ADMIN or owns the target.

    Raises:
        AuthorizationDenied: For anonymous callers and for callers that are
            neither ADMIN nor the owner
    """
    if principal is None:
        raise AuthorizationDenied()
    if principal.has_role(Role.ADMIN) or principal.id == target_owner_id:
        return
    raise AuthorizationDenied()


class AuthorizationGuard:
    def __init__(self, principal_source: IPrincipalSource) -> None:
        self.principal_source = principal_source

    def check(self, target_owner_id: int) -> Principal:
        """Authorize the current caller against `target_owner_id` and return it."""
        principal = self.principal_source.current()
        try:
            authorize(principal, target_owner_id)
        except AuthorizationDenied:
            logger.warning(
                "Access denied",
                extra={
                    "context": {
                        "principal_id": principal.id if principal else None,
                        "target_owner_id": target_owner_id,
                    }
                },
            )
            raise
        return principal

    def require_principal(self) -> Principal:
        """Return the current caller or deny anonymous access."""
        principal = self.principal_source.current()
        if principal is None:
            raise AuthorizationDenied()
        return principal
