"""
Seed the database with users and settings for demos and integration tests.

Run from project root with:
  python -m taproom.scripts.seed_db

Uses DATABASE_URL from environment (or .env). Idempotent: re-run to reset
seed rows to their seed values (matched by email / setting key).
"""

import asyncio
import os

# Ensure we load env before config
if os.path.exists(".env"):
    with open(".env") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                os.environ.setdefault(k.strip(), v.strip().strip('"').strip("'"))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taproom.config import get_settings
from taproom.db import SessionLocal, init_db
from taproom.models import Setting, User, UserRole


# One account is admin for dev/testing: Dana Admin (role=admin). The other is staff.

def get_users():
    return [
        {"name": "Dana Admin", "email": "dana@taproom.local", "role": UserRole.admin},
        {"name": "Sam Server", "email": "sam@taproom.local", "role": UserRole.staff},
    ]


def get_settings_rows():
    return [
        {
            "key": "timezone",
            "value": get_settings().default_timezone,
            "description": "Company timezone (IANA id) used for dates, specials and event times.",
        },
    ]


async def seed(session: AsyncSession) -> None:
    # Ensure tables exist
    await init_db()

    existing = await session.execute(select(User))
    existing_by_email = {u.email: u for u in existing.scalars().all()}
    for data in get_users():
        user = existing_by_email.get(data["email"])
        if user:
            user.name = data["name"]
            user.role = data["role"]
        else:
            session.add(User(**data))

    for data in get_settings_rows():
        setting = await session.get(Setting, data["key"])
        if setting:
            setting.value = data["value"]
            setting.description = data["description"]
        else:
            session.add(Setting(**data))

    await session.commit()
    print("Seed complete: users and settings created/updated.")


if __name__ == "__main__":
    async def _run():
        async with SessionLocal() as session:
            await seed(session)

    asyncio.run(_run())
