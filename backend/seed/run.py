#!/usr/bin/env python3
"""Create the schema and populate the database with development data.

Usage:
    python -m seed.run [--schema] [--clear]

Options:
    --schema    Create tables from seed/schema.sql first
    --clear     Remove all seed data before inserting
"""

import argparse
import asyncio
import logging
import pathlib
import sys

import psycopg

from core.config import AppConfig
from core.password import configure_hasher
from seed.users import seed_users, clear_users
from seed.contacts import seed_contacts, clear_contacts


logger = logging.getLogger("seed")

SCHEMA_FILE = pathlib.Path(__file__).with_name("schema.sql")


async def main(schema: bool = False, clear: bool = False) -> int:
    """Run all seed scripts."""
    config = AppConfig.load()
    configure_hasher(config.password)

    if not config.database.host:
        logger.error("No database configured")
        return 1

    logger.info("Connecting to database: %s/%s", config.database.host, config.database.name)

    async with await psycopg.AsyncConnection.connect(
        config.database.conninfo
    ) as conn:
        await conn.set_autocommit(True)

        if schema:
            logger.info("=== Creating schema ===")
            await conn.execute(SCHEMA_FILE.read_text())

        if clear:
            logger.info("=== Clearing seed data ===")
            await clear_contacts(conn)
            await clear_users(conn)

        logger.info("=== Seeding users ===")
        await seed_users(conn)

        logger.info("=== Seeding contacts ===")
        await seed_contacts(conn)

        logger.info("=== Seed complete ===")
        return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the database with development data")
    parser.add_argument(
        "--schema",
        action="store_true",
        help="Create tables before seeding",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing seed data before inserting",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    sys.exit(asyncio.run(main(schema=args.schema, clear=args.clear)))
