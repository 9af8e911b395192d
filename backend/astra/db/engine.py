from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from astra.config import settings

engine = create_async_engine(settings.database_url, echo=settings.sql_echo)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
