import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pig_server.models.dc_models import AggregateModel, SessionModel
from pig_server.models.schemas import Aggregate, PigSession

# None of these helpers commit; the caller owns the transaction.


class CreateData:
    @staticmethod
    async def add_session_data(identity: str, session: AsyncSession) -> SessionModel:
        """Insert a session with all counters at zero

        Args:
            identity (str): Owner of the session
            session (AsyncSession): Session inside an open transaction

        Returns:
            SessionModel: The freshly created session
        """
        try:
            row = PigSession(
                identity=identity,
                total_score=0,
                turn_score=0,
                last_roll=0,
                round=0,
                turn=0,
                game_over=False,
                completed=False,
                games_played=0,
            )
            session.add(row)
            await session.flush()
            return SessionModel.model_validate(row)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create session data: {e}")
            raise

    @staticmethod
    async def add_aggregate_data(slot: str, total_completions: int, session: AsyncSession) -> AggregateModel:
        """Insert an aggregate row at the given slot

        Args:
            slot (str): Canonical slot name or the identity of the creating caller
            total_completions (int): Initial count
            session (AsyncSession): Session inside an open transaction

        Returns:
            AggregateModel: The created aggregate
        """
        try:
            row = Aggregate(slot=slot, total_completions=total_completions)
            session.add(row)
            await session.flush()
            return AggregateModel.model_validate(row)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create aggregate data: {e}")
            raise


class ReadData:
    @staticmethod
    async def read_session_row(identity: str, session: AsyncSession, for_update: bool = False) -> PigSession | None:
        """Read the session row of one identity

        Args:
            identity (str): Owner of the session
            session (AsyncSession): Database session
            for_update (bool): Lock the row until the transaction ends

        Returns:
            PigSession | None: The row, None if the identity never rolled
        """
        stmt = select(PigSession).where(PigSession.identity == identity)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_session_data(identity: str, session: AsyncSession) -> SessionModel | None:
        row = await ReadData.read_session_row(identity, session)
        if row is None:
            return None
        return SessionModel.model_validate(row)

    @staticmethod
    async def session_exists(identity: str, session: AsyncSession) -> bool:
        stmt = select(PigSession.identity).where(PigSession.identity == identity)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def read_aggregate_data(slot: str, session: AsyncSession) -> AggregateModel | None:
        """Read the aggregate stored at one slot

        Args:
            slot (str): Canonical slot name or an identity
            session (AsyncSession): Database session

        Returns:
            AggregateModel | None: None if nothing lives at that slot
        """
        stmt = select(Aggregate).where(Aggregate.slot == slot)
        result = await session.execute(stmt)
        row = result.scalars().first()
        if row is None:
            return None
        return AggregateModel.model_validate(row)


class UpdateData:
    @staticmethod
    async def write_session_data(row: PigSession, data: SessionModel, session: AsyncSession) -> SessionModel:
        """Copy every game field of data onto a locked session row

        Args:
            row (PigSession): Row read with for_update inside the same transaction
            data (SessionModel): Next state of the session
            session (AsyncSession): Session inside an open transaction

        Returns:
            SessionModel: The state as written
        """
        try:
            for field_name, value in data.model_dump().items():
                setattr(row, field_name, value)
            await session.flush()
            return SessionModel.model_validate(row)
        except SQLAlchemyError as e:
            logging.error(f"Failed to update session data of {row.identity}: {e}")
            raise

    @staticmethod
    async def increment_aggregate(slot: str, session: AsyncSession) -> bool:
        """Atomically add one completion to the aggregate at slot

        The increment happens in the database so concurrent completions are never lost.

        Args:
            slot (str): Slot of an existing aggregate
            session (AsyncSession): Session inside an open transaction

        Returns:
            bool: False if no aggregate lives at slot
        """
        try:
            stmt = (
                update(Aggregate)
                .where(Aggregate.slot == slot)
                .values(total_completions=Aggregate.total_completions + 1)
            )
            result = await session.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logging.error(f"Failed to increment aggregate at {slot}: {e}")
            raise
