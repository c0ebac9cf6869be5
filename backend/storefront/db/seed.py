"""
Database seeding for local development and demos.

`seed_database` is idempotent: it does nothing when categories already
exist.
"""

import logging
import os
from datetime import datetime, timezone
from decimal import Decimal

from storefront.core.security import hash_password
from storefront.db.base import (
    Address,
    Category,
    City,
    Client,
    ClientRole,
    Order,
    OrderItem,
    Phone,
    Product,
    State,
)
from storefront.db.session import SessionLocal
from storefront.domain.entities import ClientType, Role

logger = logging.getLogger(__name__)

CATEGORY_NAMES = [
    "Computing",
    "Office supplies",
    "Bed, table and bath",
    "Electronics",
    "Gardening",
    "Decoration",
    "Perfumery",
]

# name, price, category indexes into CATEGORY_NAMES
PRODUCTS = [
    ("Computer", "2000.00", [0, 3]),
    ("Printer", "800.00", [0, 1, 3]),
    ("Mouse", "80.00", [0, 3]),
    ("Office desk", "300.00", [1]),
    ("Towel", "50.00", [2]),
    ("Quilt", "200.00", [2]),
    ("TV true color", "1200.00", [3]),
    ("Hedge trimmer", "800.00", [4]),
    ("Bedside lamp", "100.00", [5]),
    ("Pendant lamp", "180.00", [5]),
    ("Shampoo", "90.00", [6]),
]


def seed_database(db=None) -> bool:
    """Load reference data, the catalog, two accounts and one order.

    Returns:
        True if data was inserted, False if the database was already seeded
    """
    owns_session = db is None
    db = db or SessionLocal()
    try:
        if db.query(Category).first() is not None:
            logger.info("Seed skipped: database already has categories")
            return False

        categories = [Category(name=name) for name in CATEGORY_NAMES]
        db.add_all(categories)

        products = []
        for name, price, category_indexes in PRODUCTS:
            product = Product(name=name, price=Decimal(price))
            product.categories = [categories[i] for i in category_indexes]
            products.append(product)
        db.add_all(products)

        north = State(name="North State")
        south = State(name="South State")
        db.add_all([north, south])
        springfield = City(name="Springfield", state=north)
        riverton = City(name="Riverton", state=south)
        lakeside = City(name="Lakeside", state=south)
        db.add_all([springfield, riverton, lakeside])

        client = Client(
            name="Maria Silva",
            email=os.getenv("SEED_CLIENT_EMAIL", "maria@example.com"),
            tax_id="36378912377",
            client_type=ClientType.INDIVIDUAL.code,
            password_hash=hash_password(os.getenv("SEED_CLIENT_PASSWORD", "123")),
        )
        client.phones = [Phone(number="27363323"), Phone(number="93838393")]
        client.roles = [ClientRole(role=Role.CLIENT.code)]
        home = Address(
            street="Flowers Street",
            number="300",
            complement="Apt 303",
            district="Garden",
            postal_code="38220834",
            city=springfield,
        )
        client.addresses = [
            home,
            Address(
                street="Matos Avenue",
                number="105",
                complement="Room 800",
                district="Downtown",
                postal_code="38777012",
                city=riverton,
            ),
        ]

        admin = Client(
            name="Ana Costa",
            email=os.getenv("SEED_ADMIN_EMAIL", "admin@example.com"),
            tax_id="31628382740",
            client_type=ClientType.INDIVIDUAL.code,
            password_hash=hash_password(os.getenv("SEED_ADMIN_PASSWORD", "123")),
        )
        admin.phones = [Phone(number="93883321"), Phone(number="34252625")]
        admin.roles = [
            ClientRole(role=Role.ADMIN.code),
            ClientRole(role=Role.CLIENT.code),
        ]
        admin.addresses = [
            Address(
                street="Floriano Avenue",
                number="2106",
                district="Center",
                postal_code="281777012",
                city=lakeside,
            )
        ]
        db.add_all([client, admin])
        db.flush()

        order = Order(
            instant=datetime(2017, 9, 30, 10, 32, tzinfo=timezone.utc),
            client_id=client.id,
            delivery_address_id=home.id,
        )
        order.items = [
            OrderItem(product_id=products[0].id, quantity=1, price=products[0].price),
            OrderItem(product_id=products[2].id, quantity=2, price=products[2].price),
        ]
        db.add(order)
        db.commit()

        logger.info(
            "Database seeded",
            extra={
                "context": {
                    "categories": len(categories),
                    "products": len(products),
                    "clients": 2,
                }
            },
        )
        return True
    except Exception:
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()
