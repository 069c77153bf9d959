"""SQLAlchemy mixin that gives any model an Elo ranking."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, and_, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declared_attr, foreign, object_session, relationship

from elo_rankable.domain.elo.calculator import EloUpdate
from elo_rankable.domain.elo.config import get_config
from elo_rankable.domain.elo.matches import MatchRecorder, default_recorder
from elo_rankable.domain.errors import InvalidParticipantError
from elo_rankable.domain.protocol import Rankable
from elo_rankable.models.elo_ranking import EloRanking, register_rankable_type
from elo_rankable.repositories import elo_ranking_repository as ranking_repository

logger = logging.getLogger(__name__)


class HasEloRanking:
    """Adds a polymorphic one-to-one Elo ranking to a mapped class.

    The mapped class needs an integer ``id`` primary key. Rows are keyed by
    ``(class name, id)`` and deleted together with their owner.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "__tablename__" in cls.__dict__ or "__table__" in cls.__dict__:
            register_rankable_type(cls)

    @declared_attr
    def _elo_ranking(cls):  # type: ignore[no-untyped-def]
        return relationship(
            EloRanking,
            primaryjoin=lambda: and_(
                foreign(EloRanking.rankable_id) == cls.id,
                EloRanking.rankable_type == cls.__name__,
            ),
            uselist=False,
            cascade="all, delete-orphan",
            overlaps="_elo_ranking",
            lazy="select",
        )

    @classmethod
    def rankable_type(cls) -> str:
        return cls.__name__

    def get_elo_ranking(self) -> EloRanking:
        """Return this entity's ranking, creating it with the base rating if absent.

        Repeated calls return the same object.
        """
        ranking = self._elo_ranking
        if ranking is not None:
            return ranking

        ranking = EloRanking(
            rankable_type=self.rankable_type(),
            rating=get_config().base_rating,
            games_played=0,
        )
        session = object_session(self)
        if session is None:
            # Saved through the relationship cascade once the entity joins a session.
            self._elo_ranking = ranking
            return ranking
        return self._create_elo_ranking(session, ranking)

    def _create_elo_ranking(self, session: Session, ranking: EloRanking) -> EloRanking:
        try:
            with session.begin_nested():
                self._elo_ranking = ranking
                session.flush()
        except IntegrityError:
            existing = ranking_repository.find_ranking(
                session, self.rankable_type(), getattr(self, "id")
            )
            if existing is None:
                raise
            logger.warning(
                "Elo ranking for %s #%s was created concurrently; using the stored row",
                self.rankable_type(),
                existing.rankable_id,
            )
            self._elo_ranking = existing
            return existing
        return ranking

    @property
    def elo_rating(self) -> int:
        return self.get_elo_ranking().rating

    @property
    def games_played(self) -> int:
        return self.get_elo_ranking().games_played

    def is_destroyed(self) -> bool:
        state = inspect(self)
        if state.deleted or state.was_deleted:
            return True
        session = object_session(self)
        return session is not None and self in session.deleted

    def beat(
        self,
        other: object,
        *,
        recorder: MatchRecorder | None = None,
    ) -> tuple[EloUpdate, EloUpdate]:
        self._validate_opponent(other)
        return (recorder or default_recorder()).record_pairwise(self, other)

    def lost_to(
        self,
        other: object,
        *,
        recorder: MatchRecorder | None = None,
    ) -> tuple[EloUpdate, EloUpdate]:
        self._validate_opponent(other)
        return (recorder or default_recorder()).record_pairwise(other, self)

    def draw_with(
        self,
        other: object,
        *,
        recorder: MatchRecorder | None = None,
    ) -> tuple[EloUpdate, EloUpdate]:
        self._validate_opponent(other)
        return (recorder or default_recorder()).record_draw(self, other)

    elo_beat = beat
    elo_lost_to = lost_to
    elo_draw_with = draw_with

    def _validate_opponent(self, other: object) -> None:
        if other is None:
            raise InvalidParticipantError("Cannot play against None")
        if other is self:
            raise InvalidParticipantError("Cannot play against yourself")
        if not isinstance(other, Rankable):
            raise InvalidParticipantError("Opponent must support Elo ranking")

    @classmethod
    def by_elo_rating(cls) -> Select[Any]:
        return ranking_repository.by_elo_rating(cls)

    @classmethod
    def top_rated(cls, session: Session, limit: int = 10) -> list[Any]:
        return ranking_repository.top_rated(session, cls, limit)
