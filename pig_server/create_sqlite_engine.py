import pathlib

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

file_path = pathlib.Path(__file__).parents[1]
file_path /= "./pig_server/pig.sqlite3"
sqlite_url = f"sqlite+aiosqlite:///{file_path}"


def create_sqlite_engine(url: str = sqlite_url) -> AsyncEngine:
    """Create an aiosqlite engine.

    Connections are not pooled so the engine can be shared between event loops
    (the test client runs its own loop).
    """
    return create_async_engine(url=url, echo=False, poolclass=NullPool)
