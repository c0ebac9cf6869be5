"""
Unit tests for the owner-or-ADMIN rule and the AuthorizationGuard.
"""

import itertools

import pytest

from storefront.core.exceptions import AuthorizationDenied
from storefront.domain.entities import Principal, Role
from storefront.services.authorization import AuthorizationGuard, authorize
from tests.factories.repository_factories import PrincipalSourceFactory

ADMIN = Principal(id=1, email="admin@example.com", roles=frozenset({Role.ADMIN}))
CLIENT = Principal(id=5, email="maria@example.com", roles=frozenset({Role.CLIENT}))


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.security
class TestAuthorize:
    def test_admin_may_access_any_owner(self):
        authorize(ADMIN, 999)

    def test_owner_may_access_itself(self):
        authorize(CLIENT, 5)

    def test_other_client_is_denied(self):
        with pytest.raises(AuthorizationDenied) as exc_info:
            authorize(CLIENT, 6)
        assert exc_info.value.message == "Access denied"

    def test_missing_principal_is_denied(self):
        with pytest.raises(AuthorizationDenied):
            authorize(None, 5)

    def test_principal_without_roles_still_owns_itself(self):
        authorize(Principal(id=3), 3)

    @pytest.mark.parametrize(
        "roles,principal_id,target_id",
        list(
            itertools.product(
                [frozenset(), frozenset({Role.CLIENT}), frozenset({Role.ADMIN}),
                 frozenset({Role.ADMIN, Role.CLIENT})],
                [1, 2],
                [1, 2, 3],
            )
        ),
    )
    def test_allows_exactly_admin_or_same_id(self, roles, principal_id, target_id):
        principal = Principal(id=principal_id, roles=roles)
        expected = Role.ADMIN in roles or principal_id == target_id

        if expected:
            authorize(principal, target_id)
        else:
            with pytest.raises(AuthorizationDenied):
                authorize(principal, target_id)


@pytest.mark.unit
@pytest.mark.services
class TestAuthorizationGuard:
    def test_check_returns_the_principal(self):
        guard = AuthorizationGuard(PrincipalSourceFactory.create(CLIENT))
        assert guard.check(5) is CLIENT

    def test_check_denies_anonymous_caller(self):
        guard = AuthorizationGuard(PrincipalSourceFactory.create(None))
        with pytest.raises(AuthorizationDenied):
            guard.check(5)

    def test_check_denies_other_client(self):
        guard = AuthorizationGuard(PrincipalSourceFactory.create(CLIENT))
        with pytest.raises(AuthorizationDenied):
            guard.check(42)

    def test_require_principal(self):
        assert AuthorizationGuard(PrincipalSourceFactory.create(ADMIN)).require_principal() is ADMIN
        with pytest.raises(AuthorizationDenied):
            AuthorizationGuard(PrincipalSourceFactory.create(None)).require_principal()
