"""Client repository implementation following SOLID principles.

Maps between the domain Client graph (client, addresses, phones, roles)
and the relational rows. Inserting a client cascades its addresses,
phones and roles in a single commit.
"""

from typing import List, Optional

from sqlalchemy.orm import selectinload

from storefront.db.base import Address as DbAddress
from storefront.db.base import Client as DbClient
from storefront.db.base import ClientRole as DbClientRole
from storefront.db.base import Phone as DbPhone
from storefront.domain.entities import Address as DomainAddress
from storefront.domain.entities import City, ClientType, Page, PageRequest, Role, State
from storefront.domain.entities import Client as DomainClient
from storefront.domain.interfaces import IClientRepository
from storefront.domain.results import StoreResult
from storefront.repositories.base_repository import SqlAlchemyRepository


class ClientRepository(SqlAlchemyRepository, IClientRepository):
    """Repository for Client persistence operations."""

    model = DbClient
    entity_kind = "Client"
    sortable_fields = {"id": "id", "name": "name", "email": "email"}

    def _query(self):
        return self.db.query(DbClient).options(
            selectinload(DbClient.addresses),
            selectinload(DbClient.phones),
            selectinload(DbClient.roles),
        )

    def find_by_id(self, client_id: int) -> StoreResult[DomainClient]:
        db_client = self._query().filter_by(id=client_id).first()
        if db_client is None:
            return StoreResult.not_found()
        return StoreResult.ok(self._to_domain(db_client))

    def find_by_email(self, email: str) -> Optional[DomainClient]:
        db_client = self._query().filter_by(email=email).first()
        return self._to_domain(db_client) if db_client else None

    def find_all(self) -> List[DomainClient]:
        db_clients = self._query().order_by(DbClient.id).all()
        return [self._to_domain(c) for c in db_clients]

    def find_page(self, request: PageRequest) -> StoreResult[Page[DomainClient]]:
        return self._page(self._query(), request, self._to_domain)

    def save(self, client: DomainClient) -> StoreResult[DomainClient]:
        if client.id is None:
            db_client = self._new_row(client)
            self.db.add(db_client)
        else:
            db_client = self._get_row(client.id)
            if db_client is None:
                return StoreResult.not_found()
            # Scalar fields only: addresses, phones, roles and the
            # credential are never rewritten by an update
            db_client.name = client.name
            db_client.email = client.email
            db_client.tax_id = client.tax_id
            db_client.client_type = (
                client.client_type.code if client.client_type else None
            )

        self.db.commit()
        return self.find_by_id(db_client.id)

    def set_password_hash(self, client_id: int, password_hash: str) -> StoreResult[None]:
        db_client = self._get_row(client_id)
        if db_client is None:
            return StoreResult.not_found()

        db_client.password_hash = password_hash
        self.db.commit()
        return StoreResult.ok()

    def delete_by_id(self, client_id: int) -> StoreResult[None]:
        return self._delete(client_id)

    def _new_row(self, client: DomainClient) -> DbClient:
        db_client = DbClient(
            name=client.name,
            email=client.email,
            tax_id=client.tax_id,
            client_type=client.client_type.code if client.client_type else None,
            password_hash=client.password_hash,
        )
        db_client.phones = [DbPhone(number=number) for number in client.phones]
        db_client.roles = [
            DbClientRole(role=role.code)
            for role in sorted(client.roles, key=lambda r: r.code)
        ]
        db_client.addresses = [
            DbAddress(
                street=address.street,
                number=address.number,
                complement=address.complement,
                district=address.district,
                postal_code=address.postal_code,
                city_id=address.city.id if address.city else None,
            )
            for address in client.addresses
        ]
        return db_client

    def _to_domain(self, db_client: DbClient) -> DomainClient:
        """Convert DB model to domain entity, back-references included."""
        client = DomainClient(
            id=db_client.id,
            name=db_client.name,
            email=db_client.email,
            tax_id=db_client.tax_id,
            client_type=(
                ClientType.from_code(db_client.client_type)
                if db_client.client_type is not None
                else None
            ),
            password_hash=db_client.password_hash,
        )
        for db_phone in db_client.phones:
            client.add_phone(db_phone.number)
        for db_role in db_client.roles:
            client.add_role(Role.from_code(db_role.role))
        for db_address in db_client.addresses:
            client.add_address(self._address_to_domain(db_address))
        return client

    def _address_to_domain(self, db_address: DbAddress) -> DomainAddress:
        db_city = db_address.city
        city = City(id=db_address.city_id)
        if db_city is not None:
            city.name = db_city.name
            if db_city.state is not None:
                city.state = State(id=db_city.state.id, name=db_city.state.name)

        return DomainAddress(
            id=db_address.id,
            street=db_address.street,
            number=db_address.number,
            complement=db_address.complement,
            district=db_address.district,
            postal_code=db_address.postal_code,
            city=city,
        )
