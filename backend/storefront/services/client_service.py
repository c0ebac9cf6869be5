"""
Client service for business logic following SOLID principles.

This service:
- Keeps business rules separate from controllers and repositories (Single Responsibility)
- Depends on abstractions (IClientRepository, IPrincipalSource) not concrete implementations (Dependency Inversion)
- Works with domain entities, not database models

Every single-client read, update and delete is authorized before the
store is consulted, so a denied caller learns nothing about whether the
client exists.
"""

import logging
from typing import List

from storefront.core.exceptions import (
    AuthorizationDenied,
    FieldValidationError,
    NotFound,
)
from storefront.domain.entities import Client, Page, Role
from storefront.domain.interfaces import IClientRepository
from storefront.schemas.dtos import ClientDTO, ClientNewDTO
from storefront.services.authorization import AuthorizationGuard
from storefront.services.client_builder import ClientGraphBuilder
from storefront.services.error_translator import ErrorTranslator
from storefront.services.query_service import PaginatedQueryService

logger = logging.getLogger(__name__)

ENTITY_KIND = "Client"


class ClientService:
    """Application service for client-related use-cases."""

    def __init__(
        self,
        repo: IClientRepository,
        guard: AuthorizationGuard,
        builder: ClientGraphBuilder,
        translator: ErrorTranslator,
        query_service: PaginatedQueryService,
    ) -> None:
        self.repo = repo
        self.guard = guard
        self.builder = builder
        self.translator = translator
        self.query_service = query_service

    def find(self, client_id: int) -> Client:
        """Get a client by id.

        Raises:
            AuthorizationDenied: Caller is neither ADMIN nor the client
            NotFound: No client with that id
        """
        self.guard.check(client_id)
        return self.translator.unwrap(
            self.repo.find_by_id(client_id), ENTITY_KIND, client_id
        )

    def find_by_email(self, email: str) -> Client:
        principal = self.guard.require_principal()
        if not principal.has_role(Role.ADMIN) and principal.email != email:
            raise AuthorizationDenied()

        client = self.repo.find_by_email(email)
        if client is None:
            raise NotFound(ENTITY_KIND, email)
        return client

    def find_all(self) -> List[Client]:
        return self.repo.find_all()

    def find_page(
        self, page: int, lines_per_page: int, order_by: str, direction: str
    ) -> Page:
        return self.query_service.find_page(page, lines_per_page, order_by, direction)

    def insert(self, dto: ClientNewDTO) -> Client:
        """Register a new client with its first address and phones.

        Business Rules:
        - E-mail must not belong to another client
        - Any id in the payload is ignored
        - Client, address and phones are stored in one transaction
        """
        self._ensure_email_available(dto.email)
        client = self.builder.build_new(dto)
        saved = self.translator.unwrap(self.repo.save(client), ENTITY_KIND)
        logger.info(
            "Client registered",
            extra={"context": {"client_id": saved.id, "phones": len(saved.phones)}},
        )
        return saved

    def update(self, dto: ClientDTO) -> Client:
        """Copy name and e-mail onto the stored client.

        Identity, addresses, phones, roles and the credential are left as
        they are.
        """
        source = self.builder.build_update(dto)
        existing = self.find(source.id)
        self._ensure_email_available(source.email, owner_id=existing.id)

        existing.name = source.name
        existing.email = source.email
        return self.translator.unwrap(self.repo.save(existing), ENTITY_KIND, existing.id)

    def delete(self, client_id: int) -> None:
        """Delete a client and its addresses.

        Raises:
            AuthorizationDenied: Caller is neither ADMIN nor the client
            NotFound: No client with that id
            DataIntegrityConflict: Orders still reference the client
        """
        self.guard.check(client_id)
        self.translator.unwrap(
            self.repo.delete_by_id(client_id),
            ENTITY_KIND,
            client_id,
            conflict_message="Cannot delete because there are related orders",
        )
        logger.info("Client deleted", extra={"context": {"client_id": client_id}})

    def _ensure_email_available(self, email: str, owner_id=None) -> None:
        other = self.repo.find_by_email(email)
        if other is not None and other.id != owner_id:
            raise FieldValidationError([("email", "E-mail already registered")])
