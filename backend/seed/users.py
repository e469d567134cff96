"""Seed data for the users table."""

import logging

from core.password import hash_password


logger = logging.getLogger(__name__)

# Dev user - contacts in seed/contacts.py belong to this account
DEV_USERNAME = "test"

SAMPLE_USERS = [
    {"username": DEV_USERNAME, "name": "Test User", "password": "test"},
    {"username": "jsmith", "name": "John Smith", "password": "jsmith"},
]


async def seed_users(conn) -> None:
    """Insert sample users, skipping ones that already exist."""
    async with conn.cursor() as cur:
        for user in SAMPLE_USERS:
            await cur.execute(
                "SELECT username FROM users WHERE username = %(username)s",
                {"username": user["username"]},
            )
            if await cur.fetchone():
                logger.info("User already exists: %s", user["username"])
                continue

            await cur.execute(
                """
                INSERT INTO users (username, name, pwhash)
                VALUES (%(username)s, %(name)s, %(pwhash)s)
                """,
                {
                    "username": user["username"],
                    "name": user["name"],
                    "pwhash": hash_password(user["password"]),
                },
            )
            logger.info("Created user: %s", user["username"])


async def clear_users(conn) -> None:
    """Remove all seeded users; sessions and contacts cascade."""
    async with conn.cursor() as cur:
        usernames = [user["username"] for user in SAMPLE_USERS]
        await cur.execute(
            "DELETE FROM users WHERE username = ANY(%(usernames)s)",
            {"usernames": usernames},
        )
        logger.info("Cleared seeded users")
