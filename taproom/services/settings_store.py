import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taproom.models import ActivityLog, Setting


class SqlSettingsStore:
    """Settings collaborator backed by the ``settings`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def fetch(self, key: str) -> Setting | None:
        return await self.session.get(Setting, key)

    async def get(self, key: str) -> str | None:
        setting = await self.fetch(key)
        return setting.value if setting else None

    async def list_all(self) -> list[Setting]:
        result = await self.session.execute(select(Setting).order_by(Setting.key))
        return list(result.scalars().all())

    async def upsert(
        self,
        key: str,
        value: str,
        description: str | None = None,
        user_id: uuid.UUID | None = None,
    ) -> Setting:
        setting = await self.session.get(Setting, key)
        before = setting.value if setting else None
        if setting is None:
            setting = Setting(key=key, value=value, description=description)
            self.session.add(setting)
        else:
            setting.value = value
            if description is not None:
                setting.description = description
        self.session.add(
            ActivityLog(
                user_id=user_id,
                action="update" if before is not None else "create",
                entity=f"setting:{key}",
                meta={"before": before, "after": value},
            )
        )
        await self.session.commit()
        await self.session.refresh(setting)
        return setting
