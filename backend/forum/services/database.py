from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker
from forum.core.config import settings
from forum.core.logging import logger

DATABASE_URL = settings.DATABASE_URL
engine = create_async_engine(DATABASE_URL, echo=settings.SQL_ECHO)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


def configure(url: str, **engine_kwargs) -> AsyncEngine:
    """Point the module-level engine and session maker at another database."""
    global engine, async_session_maker
    engine = create_async_engine(url, **engine_kwargs)
    async_session_maker = async_sessionmaker(engine, expire_on_commit=False)
    logger.info("database_configured", dialect=engine.dialect.name)
    return engine


async def init_models() -> None:
    """Create all tables for the registered models."""
    import forum.models  # noqa: F401  registers mappers
    from forum.models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_created", tables=sorted(Base.metadata.tables))
