"""Shared fixtures: in-memory SQLite database with Player/Team rankables."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from elo_rankable.db import create_db_engine, create_session_factory
from elo_rankable.domain.elo.config import reset_config
from elo_rankable.models import Base
from rankable_models import Player, Team


@pytest.fixture(autouse=True)
def default_config() -> Iterator[None]:
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        yield session


@pytest.fixture
def make_player(session: Session) -> Callable[[str], Player]:
    def _make(name: str) -> Player:
        player = Player(name=name)
        session.add(player)
        session.flush()
        return player

    return _make


@pytest.fixture
def make_team(session: Session) -> Callable[[str], Team]:
    def _make(name: str) -> Team:
        team = Team(name=name)
        session.add(team)
        session.flush()
        return team

    return _make
