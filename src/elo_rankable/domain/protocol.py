"""Contracts between the rating engine and the objects it rates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from elo_rankable.domain.elo.config import EloConfig


@runtime_checkable
class RatingRecord(Protocol):
    """Mutable (rating, games_played) pair owned by one rankable entity."""

    rating: int
    games_played: int

    def k_factor(self, config: EloConfig | None = None) -> float: ...

    def check_result(self, new_rating: int) -> None:
        """Raise if ``new_rating`` could not be stored; never mutates."""
        ...

    def apply_result(self, new_rating: int) -> None: ...

    def is_persisted(self) -> bool: ...


@runtime_checkable
class Rankable(Protocol):
    """Anything whose Elo rating is tracked."""

    def get_elo_ranking(self) -> RatingRecord | None: ...

    def is_destroyed(self) -> bool: ...


__all__ = ["Rankable", "RatingRecord"]
