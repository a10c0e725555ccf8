"""Completion counting across all players.

The global counter normally lives at one canonical slot chosen by configuration.
Deployments created before that could also hold it at the slot of the caller
that initialized it; legacy_fallback makes complete search there too.
global_completions only ever looks at the canonical slot.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pig_server.crud import CreateData, ReadData, UpdateData
from pig_server.domain.pig_rules import apply_complete
from pig_server.models.dc_models import AggregateModel, SessionModel
from pig_server.services.session_store import SessionStore


class StatsAggregator:
    def __init__(
        self,
        Session: async_sessionmaker,
        store: SessionStore,
        canonical_slot: str,
        legacy_fallback: bool = False,
    ):
        self.Session: async_sessionmaker = Session
        self.store: SessionStore = store
        self.canonical_slot: str = canonical_slot
        self.legacy_fallback: bool = legacy_fallback

    async def initialize(self, identity: str | None = None, restricted: bool = False) -> AggregateModel:
        """Make sure an aggregate exists where this caller would put it

        Args:
            identity (str | None): Initializing caller, required when restricted
            restricted (bool): The caller cannot write the canonical slot, use its own slot.
                Only legacy fallback mode ever reads a caller slot, so this needs legacy_fallback

        Returns:
            AggregateModel: The existing or created aggregate
        """
        if restricted and not self.legacy_fallback:
            raise ValueError("Restricted initialization is only meaningful in legacy fallback mode")
        if restricted and not identity:
            raise ValueError("Restricted initialization needs the caller identity")
        slot = identity if restricted else self.canonical_slot

        async with self.Session() as session:
            async with session.begin():
                aggregate = await ReadData.read_aggregate_data(slot, session)
                if aggregate is not None:
                    return aggregate
                logging.info(f"Initializing aggregate at slot {slot}")
                return await CreateData.add_aggregate_data(slot, 0, session)

    async def complete(self, identity: str) -> SessionModel:
        """Count the won game of identity, for the player and globally

        Args:
            identity (str): Authenticated caller

        Raises:
            NoSession: identity has never rolled
            NotWon: the session is not over
            AlreadyCompleted: this win was already counted

        Returns:
            SessionModel: State after completion, still over until reset
        """
        async with self.Session() as session:
            async with session.begin():
                result = await self.store.mutate_in(
                    session, identity, lambda current: apply_complete(identity, current)
                )
                slot = await self._count_completion(identity, session)
        logging.info(f"{identity} completed game #{result.games_played}, counted at slot {slot}")
        return result

    async def global_completions(self) -> int:
        async with self.Session() as session:
            aggregate = await ReadData.read_aggregate_data(self.canonical_slot, session)
        if aggregate is None:
            return 0
        return aggregate.total_completions

    async def _count_completion(self, identity: str, session: AsyncSession) -> str:
        if await UpdateData.increment_aggregate(self.canonical_slot, session):
            return self.canonical_slot

        if not self.legacy_fallback:
            await CreateData.add_aggregate_data(self.canonical_slot, 1, session)
            return self.canonical_slot

        if await UpdateData.increment_aggregate(identity, session):
            return identity
        logging.warning(f"No aggregate found, creating one at slot {identity}")
        await CreateData.add_aggregate_data(identity, 1, session)
        return identity
