import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from pig_server.authentication.basic_authentication import BasicAuthentication
from pig_server.db import Session, build_session_factory, create_tables, engine
from pig_server.dice import DiceRoller
from pig_server.load_secrets import (
    aggregate_legacy_fallback,
    aggregate_slot,
    dice_seed,
    enable_test_routes,
    log_level,
    pepper_data,
)
from pig_server.routers.pig import build_pig_router
from pig_server.services.game_engine import GameEngine
from pig_server.services.session_store import SessionStore
from pig_server.services.stats_aggregator import StatsAggregator

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def create_app(
    db_engine: AsyncEngine = engine,
    session_factory: async_sessionmaker | None = None,
    *,
    canonical_slot: str = aggregate_slot,
    legacy_fallback: bool = aggregate_legacy_fallback,
    seed: int | None = dice_seed,
    test_routes: bool = enable_test_routes,
    pepper: str = pepper_data,
) -> FastAPI:
    """Wire the store, engine, aggregator and identity provider into one app"""
    session_factory = session_factory or build_session_factory(db_engine)
    store = SessionStore(session_factory)
    game_engine = GameEngine(store, DiceRoller(seed))
    stats_aggregator = StatsAggregator(
        session_factory, store, canonical_slot, legacy_fallback=legacy_fallback
    )
    basic_auth = BasicAuthentication(session_factory, pepper, reserved_names=(canonical_slot,))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables and the canonical aggregate.
        This function is called to start the server.
        """
        await create_tables(db_engine)
        if not legacy_fallback:
            await stats_aggregator.initialize()
        logging.info(f"Pig server ready, aggregate slot {canonical_slot}, legacy fallback {legacy_fallback}")
        try:
            yield
        finally:
            logging.info("Stop Server")

    app = FastAPI(title="Pig", lifespan=lifespan)
    app.state.game_engine = game_engine
    app.state.stats_aggregator = stats_aggregator
    app.state.basic_auth = basic_auth
    app.include_router(build_pig_router(game_engine, stats_aggregator, basic_auth, test_routes))

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app(engine, Session)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pig_server.main:app", host="0.0.0.0", port=8080)
