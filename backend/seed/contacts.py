"""Seed data for contacts and their addresses."""

import logging

from seed.users import DEV_USERNAME


logger = logging.getLogger(__name__)

SEED_CONTACTS = [
    {
        "first_name": "Alice",
        "last_name": "Johnson",
        "email": "alice.johnson@techstart.io",
        "phone": "555-0101",
        "addresses": [
            {
                "street": "123 Tech Park Dr",
                "city": "San Jose",
                "province": "CA",
                "country": "USA",
                "postal_code": "95110",
            },
        ],
    },
    {
        "first_name": "Bob",
        "last_name": "Williams",
        "email": "bob.williams@consultinggroup.com",
        "phone": "555-0201",
        "addresses": [],
    },
    {
        "first_name": "Carol",
        "last_name": "Martinez",
        "email": None,
        "phone": "555-0301",
        "addresses": [
            {
                "street": "456 Medical Center Blvd",
                "city": "Palo Alto",
                "province": "CA",
                "country": "USA",
                "postal_code": "94301",
            },
        ],
    },
    {
        "first_name": "David",
        "last_name": "Chen",
        "email": "david@chendesign.co",
        "phone": None,
        "addresses": [],
    },
    {
        "first_name": "Eko",
        "last_name": None,
        "email": None,
        "phone": None,
        "addresses": [
            {
                "street": None,
                "city": "Jakarta",
                "province": "DKI Jakarta",
                "country": "Indonesia",
                "postal_code": "10110",
            },
        ],
    },
]


async def seed_contacts(conn) -> None:
    """Insert sample contacts for the dev user."""
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT count(*) FROM contacts WHERE username = %(username)s",
            {"username": DEV_USERNAME},
        )
        row = await cur.fetchone()
        if row and row[0]:
            logger.info("Contacts already seeded for %s", DEV_USERNAME)
            return

        for contact in SEED_CONTACTS:
            await cur.execute(
                """
                INSERT INTO contacts (username, first_name, last_name, email, phone)
                VALUES (%(username)s, %(first_name)s, %(last_name)s, %(email)s, %(phone)s)
                RETURNING id
                """,
                {
                    "username": DEV_USERNAME,
                    "first_name": contact["first_name"],
                    "last_name": contact["last_name"],
                    "email": contact["email"],
                    "phone": contact["phone"],
                },
            )
            contact_row = await cur.fetchone()
            contact_id = contact_row[0]

            for address in contact["addresses"]:
                await cur.execute(
                    """
                    INSERT INTO addresses
                        (contact_id, street, city, province, country, postal_code)
                    VALUES
                        (%(contact_id)s, %(street)s, %(city)s, %(province)s,
                         %(country)s, %(postal_code)s)
                    """,
                    {"contact_id": contact_id, **address},
                )

            logger.info(
                "Created contact: %s (%d addresses)",
                contact["first_name"],
                len(contact["addresses"]),
            )


async def clear_contacts(conn) -> None:
    """Remove the dev user's contacts; addresses cascade."""
    async with conn.cursor() as cur:
        await cur.execute(
            "DELETE FROM contacts WHERE username = %(username)s",
            {"username": DEV_USERNAME},
        )
        logger.info("Cleared seeded contacts")
