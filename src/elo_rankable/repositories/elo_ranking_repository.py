"""Persistence and leaderboard helpers for Elo rankings using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from sqlalchemy import Select, and_, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, object_session

from elo_rankable.domain.protocol import RatingRecord
from elo_rankable.models.elo_ranking import EloRanking

ModelT = TypeVar("ModelT")

DEFAULT_LEADERBOARD_LIMIT = 10


def ensure_elo_ranking_schema(engine: Engine) -> None:
    """Create the elo_rankings table and its indexes if they do not exist."""
    with engine.begin() as connection:
        EloRanking.__table__.create(bind=connection, checkfirst=True)


def find_ranking(session: Session, rankable_type: str, rankable_id: int) -> EloRanking | None:
    """Fetch the ranking row of one entity, if it has one."""
    statement = select(EloRanking).where(
        EloRanking.rankable_type == rankable_type,
        EloRanking.rankable_id == rankable_id,
    )
    return session.execute(statement).scalar_one_or_none()


def by_elo_rating(model: type[ModelT]) -> Select[tuple[ModelT]]:
    """Select ``model`` rows that have a ranking, highest rating first."""
    model_id = getattr(model, "id")
    return (
        select(model)
        .join(
            EloRanking,
            and_(
                EloRanking.rankable_id == model_id,
                EloRanking.rankable_type == model.__name__,
            ),
        )
        .order_by(EloRanking.rating.desc(), model_id)
    )


def top_rated(
    session: Session,
    model: type[ModelT],
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> list[ModelT]:
    """Return the ``limit`` highest-rated entities of one type."""
    return list(session.scalars(by_elo_rating(model).limit(limit)).all())


def top_rankings(
    session: Session,
    *,
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
    rankable_type: str | None = None,
) -> list[EloRanking]:
    """Return the highest ranking rows, optionally for one entity type."""
    statement = select(EloRanking).order_by(EloRanking.rating.desc(), EloRanking.id)
    if rankable_type is not None:
        statement = statement.where(EloRanking.rankable_type == rankable_type)
    return list(session.scalars(statement.limit(limit)).all())


def count_rankings(session: Session, *, rankable_type: str | None = None) -> int:
    """Count entities that have a ranking row."""
    statement = select(func.count(EloRanking.id))
    if rankable_type is not None:
        statement = statement.where(EloRanking.rankable_type == rankable_type)
    result = session.scalar(statement)
    return int(result or 0)


def lock_rankings_for_update(rankings: Sequence[RatingRecord]) -> None:
    """Re-read rankings with ``SELECT ... FOR UPDATE`` in id order.

    Pass as ``MatchRecorder(lock_rankings=...)``; the recorder hands over every
    participant of a match at once, so concurrent matches sharing entities
    acquire their row locks in the same global order.
    """
    unique: dict[int, EloRanking] = {
        ranking.id: ranking for ranking in rankings if isinstance(ranking, EloRanking)
    }
    for ranking_id in sorted(unique):
        ranking = unique[ranking_id]
        session = object_session(ranking)
        if session is not None:
            session.refresh(ranking, with_for_update=True)


__all__ = [
    "DEFAULT_LEADERBOARD_LIMIT",
    "by_elo_rating",
    "count_rankings",
    "ensure_elo_ranking_schema",
    "find_ranking",
    "lock_rankings_for_update",
    "top_rankings",
    "top_rated",
]
