"""Keyed store of game sessions.

- Maps an identity to at most one session.
- This layer owns session/transaction boundaries.
- Each call is one transaction; an exception raised inside mutate rolls it back.
"""

import logging
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pig_server.crud import CreateData, ReadData, UpdateData
from pig_server.errors import NoSession
from pig_server.models.dc_models import SessionModel

SessionUpdate = Callable[[SessionModel], SessionModel]


class SessionStore:
    """Sessions keyed by identity, backed by the pig_session table.

    mutate reads the row with SELECT ... FOR UPDATE so concurrent writers to
    one identity are serialized on Postgres. SQLite drops the row lock, so
    there two concurrent writes to the same identity can lose an update.
    Writes to different identities never conflict on either backend.
    """

    def __init__(self, Session: async_sessionmaker):
        self.Session: async_sessionmaker = Session

    async def exists(self, identity: str) -> bool:
        async with self.Session() as session:
            return await ReadData.session_exists(identity, session)

    async def get(self, identity: str) -> SessionModel | None:
        async with self.Session() as session:
            return await ReadData.read_session_data(identity, session)

    async def create(self, identity: str) -> SessionModel:
        async with self.Session() as session:
            async with session.begin():
                return await CreateData.add_session_data(identity, session)

    async def mutate(self, identity: str, fn: SessionUpdate, create_missing: bool = False) -> SessionModel:
        """Read, transform and write back one session in a single transaction.

        Args:
            identity (str): Owner of the session
            fn (SessionUpdate): Pure transition from the current to the next state
            create_missing (bool): Start a zeroed session instead of raising NoSession

        Returns:
            SessionModel: The state after fn
        """
        async with self.Session() as session:
            async with session.begin():
                return await self.mutate_in(session, identity, fn, create_missing)

    async def mutate_in(
        self,
        session: AsyncSession,
        identity: str,
        fn: SessionUpdate,
        create_missing: bool = False,
    ) -> SessionModel:
        """Same as mutate, inside a transaction opened by the caller."""
        row = await ReadData.read_session_row(identity, session, for_update=True)
        if row is None:
            if not create_missing:
                raise NoSession(identity)
            await CreateData.add_session_data(identity, session)
            logging.info(f"Created session for {identity}")
            row = await ReadData.read_session_row(identity, session, for_update=True)

        current = SessionModel.model_validate(row)
        return await UpdateData.write_session_data(row, fn(current), session)
