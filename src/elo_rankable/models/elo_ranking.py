"""elo_rankings table model."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
    inspect,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, mapped_column, object_session, validates

from elo_rankable.domain.elo.calculator import round_rating
from elo_rankable.domain.elo.config import EloConfig, get_config
from elo_rankable.domain.errors import PersistenceValidationError
from elo_rankable.models.base import Base

RANKABLE_TYPES: dict[str, type[Any]] = {}


def register_rankable_type(model: type[Any]) -> None:
    """Make ``model`` resolvable from the ``rankable_type`` column."""
    RANKABLE_TYPES[model.__name__] = model


class EloRanking(Base):
    """Current Elo rating of one rankable entity (one row per entity)."""

    __tablename__ = "elo_rankings"
    __table_args__ = (
        UniqueConstraint("rankable_type", "rankable_id", name="uq_elo_rankings_rankable"),
        CheckConstraint("rating > 0", name="ck_elo_rankings_rating_positive"),
        CheckConstraint("games_played >= 0", name="ck_elo_rankings_games_played"),
        Index("idx_elo_rankings_rating", "rating"),
        Index("idx_elo_rankings_rankable", "rankable_type", "rankable_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    rankable_type: Mapped[str] = mapped_column(String(128), nullable=False)
    rankable_id: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    games_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __init__(self, **kwargs: Any) -> None:
        if kwargs.get("rating") is None:
            kwargs["rating"] = get_config().base_rating
        if kwargs.get("games_played") is None:
            kwargs["games_played"] = 0
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"EloRanking(rankable_type={self.rankable_type!r}, rankable_id={self.rankable_id!r}, "
            f"rating={self.rating!r}, games_played={self.games_played!r})"
        )

    @staticmethod
    def _checked_rating(value: Any) -> int:
        if value is None:
            raise PersistenceValidationError("Rating is required")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PersistenceValidationError("Rating must be a number")
        if not math.isfinite(value) or value <= 0:
            raise PersistenceValidationError("Rating must be greater than 0")
        return round_rating(value)

    @validates("rating")
    def _validate_rating(self, key: str, value: Any) -> int:
        return self._checked_rating(value)

    @validates("games_played")
    def _validate_games_played(self, key: str, value: Any) -> int:
        if value is None:
            raise PersistenceValidationError("Games played is required")
        if isinstance(value, bool) or not isinstance(value, int):
            raise PersistenceValidationError("Games played must be an integer")
        if value < 0:
            raise PersistenceValidationError("Games played must be greater than or equal to 0")
        return value

    def k_factor(self, config: EloConfig | None = None) -> float:
        """K-factor for the current rating."""
        return (config or get_config()).k_factor_for(self.rating)

    def is_persisted(self) -> bool:
        return inspect(self).persistent

    @property
    def rankable(self) -> Any | None:
        """The entity owning this record, loaded through its session."""
        model = RANKABLE_TYPES.get(self.rankable_type)
        session = object_session(self)
        if model is None or session is None:
            return None
        return session.get(model, self.rankable_id)

    def check_result(self, new_rating: int) -> None:
        self._checked_rating(new_rating)

    def apply_result(self, new_rating: int) -> None:
        """Store a post-match rating and count the game."""
        self.rating = new_rating
        self.games_played = self.games_played + 1

        session = object_session(self)
        if session is None:
            return
        try:
            session.flush()
        except IntegrityError as exc:
            raise PersistenceValidationError(
                f"Could not save Elo ranking for {self.rankable_type} #{self.rankable_id}: "
                f"{exc.orig}"
            ) from exc
