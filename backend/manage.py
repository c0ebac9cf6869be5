"""Management commands for the storefront backend application."""

from __future__ import annotations

import logging

import click

from storefront.db.seed import seed_database
from storefront.db.session import create_tables as create_all_tables
from storefront.db.session import drop_tables

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("create-tables")
@click.option("--drop", is_flag=True, help="Drop every table before creating them.")
def create_tables(drop: bool) -> None:
    """Create all tables for the configured DATABASE_URL."""
    if drop:
        drop_tables()
        logging.info("Dropped all tables.")
    create_all_tables()
    logging.info("Tables created.")


@cli.command("seed")
def seed() -> None:
    """Load reference data, the demo catalog, two accounts and one order."""
    create_all_tables()
    if seed_database():
        logging.info("Seed data inserted.")
    else:
        logging.info("Database already seeded; no changes made.")


if __name__ == "__main__":
    cli()
