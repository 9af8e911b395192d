from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from astra.db.engine import async_session_factory
from astra.services.store import BlueprintStore, SqlBlueprintStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session


def get_blueprint_store(db: AsyncSession = Depends(get_db)) -> BlueprintStore:
    return SqlBlueprintStore(db)
