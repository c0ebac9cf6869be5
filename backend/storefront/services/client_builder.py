"""
Assembles client aggregates from request payloads.

A creation payload becomes a transient Client graph: the client, one
address pointing back to it and a duplicate-free list of phones. An
update payload becomes a partial Client used only as a field source.
"""

from storefront.domain.entities import Address, City, Client, ClientType, Role
from storefront.domain.interfaces import IPasswordHasher
from storefront.schemas.dtos import ClientDTO, ClientNewDTO


class ClientGraphBuilder:
    """Builds Client entities; the hasher is the only collaborator."""

    def __init__(self, hasher: IPasswordHasher) -> None:
        self.hasher = hasher

    def build_new(self, dto: ClientNewDTO) -> Client:
        """Build a transient client ready to be inserted.

        Business Rules:
        - No id is set on any entity; the store assigns them
        - The address holds a City stub carrying only the id
        - phone1 comes first, then each supplied extra phone, duplicates skipped
        - New accounts get the CLIENT role

        Raises:
            ValidationError: If the client type code is unknown
        """
        client_type = ClientType.from_code(dto.type)

        client = Client(
            name=dto.name,
            email=dto.email,
            tax_id=dto.tax_id,
            client_type=client_type,
            password_hash=self.hasher.hash(dto.password),
        )
        client.add_role(Role.CLIENT)

        client.add_address(
            Address(
                street=dto.street,
                number=dto.number,
                complement=dto.complement,
                district=dto.district,
                postal_code=dto.postal_code,
                city=City(id=dto.city_id),
            )
        )

        client.add_phone(dto.phone1)
        for phone in dto.extra_phones:
            client.add_phone(phone)

        return client

    def build_update(self, dto: ClientDTO) -> Client:
        return Client(id=dto.id, name=dto.name, email=dto.email)
