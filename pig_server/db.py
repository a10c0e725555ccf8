import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pig_server.create_postgres_engine import create_postgres_engine
from pig_server.create_sqlite_engine import create_sqlite_engine
from pig_server.load_secrets import database_url, db_name
from pig_server.models.schemas import Base


def build_engine(url: str | None = database_url) -> AsyncEngine:
    """Pick the engine from configuration.

    DATABASE_URL wins; otherwise Postgres when DB_NAME is set, else the local SQLite file.
    """
    if url:
        if url.startswith("sqlite"):
            return create_sqlite_engine(url)
        return create_postgres_engine(url)
    if db_name:
        return create_postgres_engine()
    return create_sqlite_engine()


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create tables if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("Tables are ready")


engine = build_engine()
# Centralized session factory to avoid creating it in router modules.
Session = build_session_factory(engine)
