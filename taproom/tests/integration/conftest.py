"""Integration test isolation fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from taproom.db import SessionLocal, engine, init_db
from taproom.models import ActivityLog, User
from taproom.scripts.seed_db import seed


@pytest_asyncio.fixture(scope="session", autouse=True)
async def seeded_user_ids() -> dict[str, str]:
    """Reset to seed state (timezone back to the default) and return email -> user id."""
    try:
        await init_db()
    except (OSError, SQLAlchemyError) as exc:
        pytest.skip(f"Integration stack not reachable: {exc}")

    async with SessionLocal() as session:
        await session.execute(delete(ActivityLog))
        await session.commit()

    async with SessionLocal() as session:
        await seed(session)
        result = await session.execute(select(User))
        ids = {u.email: str(u.id) for u in result.scalars().all()}

    # Pooled connections belong to this fixture's event loop.
    await engine.dispose()
    return ids


def _headers(user_id: str) -> dict:
    return {"X-User-Id": user_id, "Content-Type": "application/json"}


@pytest.fixture
def admin_headers(seeded_user_ids):
    """Headers for the admin user (Dana Admin from seed)."""
    uid = seeded_user_ids.get("dana@taproom.local")
    assert uid, "Seed user dana@taproom.local not found; run make seed"
    return _headers(uid)


@pytest.fixture
def staff_headers(seeded_user_ids):
    """Headers for a non-admin user (Sam Server from seed)."""
    uid = seeded_user_ids.get("sam@taproom.local")
    assert uid, "Seed user sam@taproom.local not found; run make seed"
    return _headers(uid)
