import logging
from typing import Tuple

from storefront.core.exceptions import AuthenticationFailed, NotFound
from storefront.core.security import create_client_token, generate_password
from storefront.domain.entities import Client, Principal
from storefront.domain.interfaces import (
    IClientRepository,
    IEmailDispatcher,
    IPasswordHasher,
)
from storefront.services.error_translator import ErrorTranslator

logger = logging.getLogger(__name__)


class AuthService:
    """Login, token refresh and password reset for client accounts."""

    def __init__(
        self,
        repo: IClientRepository,
        hasher: IPasswordHasher,
        email_dispatcher: IEmailDispatcher,
        translator: ErrorTranslator,
    ) -> None:
        self.repo = repo
        self.hasher = hasher
        self.email_dispatcher = email_dispatcher
        self.translator = translator

    def login(self, email: str, password: str) -> Tuple[Client, str]:
        """Authenticate with e-mail and password.

        Returns:
            The client and a signed access token

        Raises:
            AuthenticationFailed: Unknown e-mail or wrong password
        """
        client = self.repo.find_by_email(email) if email else None
        if (
            client is None
            or not isinstance(password, str)
            or not password
            or not self.hasher.verify(password, client.password_hash)
        ):
            logger.warning("Failed login attempt", extra={"context": {"email": email}})
            raise AuthenticationFailed("Invalid email or password")

        logger.info("Client logged in", extra={"context": {"client_id": client.id}})
        return client, self._token_for(client.id, client.email, client.roles)

    def refresh_token(self, principal: Principal) -> str:
        return self._token_for(principal.id, principal.email, principal.roles)

    def send_new_password(self, email: str) -> None:
        """Replace the client's password with a random one and e-mail it."""
        client = self.repo.find_by_email(email)
        if client is None:
            raise NotFound("Client", email)

        new_password = generate_password()
        self.translator.unwrap(
            self.repo.set_password_hash(client.id, self.hasher.hash(new_password)),
            "Client",
            client.id,
        )
        logger.info("Password reset", extra={"context": {"client_id": client.id}})
        self.email_dispatcher.send_new_password(client, new_password)

    @staticmethod
    def _token_for(client_id, email, roles) -> str:
        return create_client_token(client_id, email, [r.description for r in roles])
