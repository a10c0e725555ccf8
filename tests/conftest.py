"""Shared fixtures: every test gets its own SQLite database file."""

from __future__ import annotations

import asyncio

import pytest

from pig_server.create_sqlite_engine import create_sqlite_engine
from pig_server.db import build_session_factory, create_tables
from pig_server.dice import DiceRoller
from pig_server.services.game_engine import GameEngine
from pig_server.services.session_store import SessionStore
from pig_server.services.stats_aggregator import StatsAggregator

CANONICAL_SLOT = "__module__"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db_engine(tmp_path):
    engine = create_sqlite_engine(f"sqlite+aiosqlite:///{tmp_path / 'pig.sqlite3'}")
    run(create_tables(engine))
    yield engine
    run(engine.dispose())


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> SessionStore:
    return SessionStore(session_factory)


@pytest.fixture
def game_engine(store) -> GameEngine:
    return GameEngine(store, DiceRoller(seed=1234))


@pytest.fixture
def stats_aggregator(session_factory, store) -> StatsAggregator:
    return StatsAggregator(session_factory, store, CANONICAL_SLOT)


@pytest.fixture
def legacy_aggregator(session_factory, store) -> StatsAggregator:
    return StatsAggregator(session_factory, store, CANONICAL_SLOT, legacy_fallback=True)


def win_game(game_engine: GameEngine, identity: str):
    """Eight sixes and a two, then hold: exactly the target score."""
    for _ in range(8):
        run(game_engine.roll_with_face(identity, 6))
    run(game_engine.roll_with_face(identity, 2))
    return run(game_engine.hold(identity))
