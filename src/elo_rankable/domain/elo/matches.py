"""Validation and sequencing of match outcomes into pairwise Elo updates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from itertools import combinations

from elo_rankable.domain.elo.calculator import EloCalculator, EloUpdate
from elo_rankable.domain.errors import InvalidMatchError, InvalidParticipantError
from elo_rankable.domain.protocol import Rankable, RatingRecord

logger = logging.getLogger(__name__)

PairUpdate = tuple[EloUpdate, EloUpdate]
LockRankingsFn = Callable[[Sequence[RatingRecord]], None]


def validate_participant(entity: object, role: str = "Player") -> RatingRecord:
    """Check that ``entity`` can take part in a match and return its rating record."""
    if entity is None:
        raise InvalidParticipantError(f"{role} cannot be None")
    if not isinstance(entity, Rankable):
        raise InvalidParticipantError(f"{role} must support Elo ranking")
    if entity.is_destroyed():
        raise InvalidParticipantError(f"{role} has been destroyed")

    ranking = entity.get_elo_ranking()
    if ranking is None:
        raise InvalidParticipantError(f"{role} Elo ranking is missing")
    if not ranking.is_persisted():
        raise InvalidParticipantError(f"{role} Elo ranking must be persisted")
    return ranking


class MatchRecorder:
    """Records 1v1, draw, winner-vs-all and multiplayer outcomes.

    Every participant is validated before the first rating changes, so a
    rejected call leaves all ratings untouched. Each pair is applied whole or
    not at all; pairs are applied in order and earlier pairs are not rolled
    back if a later one fails. Wrap the call in a session transaction for
    all-or-nothing.

    ``lock_rankings`` is called once with every participant's record after
    validation and before the first update, which lets a storage layer take
    row locks in a single consistent order.
    """

    def __init__(
        self,
        calculator: EloCalculator | None = None,
        *,
        lock_rankings: LockRankingsFn | None = None,
    ) -> None:
        self.calculator = calculator or EloCalculator()
        self.lock_rankings = lock_rankings

    def record_pairwise(self, winner: object, loser: object) -> PairUpdate:
        """Record ``winner`` beating ``loser``."""
        winner_ranking, loser_ranking = self._validate_pair(winner, loser, "Winner", "Loser")
        self._lock((winner_ranking, loser_ranking))
        return self._apply(winner, loser, winner_ranking, loser_ranking, draw=False)

    def record_draw(self, first: object, second: object) -> PairUpdate:
        """Record a draw between two entities."""
        first_ranking, second_ranking = self._validate_pair(first, second, "Player", "Player")
        self._lock((first_ranking, second_ranking))
        return self._apply(first, second, first_ranking, second_ranking, draw=True)

    def record_multiplayer_match(self, players: Sequence[object]) -> list[PairUpdate]:
        """Record a ranked free-for-all.

        ``players`` is ordered best first: each player beats everyone after it.
        """
        players = list(players)
        if len(players) < 2:
            raise InvalidMatchError("Need at least 2 players for a match")
        for player in players:
            if player is None:
                raise InvalidParticipantError("Player cannot be None")
        if len({id(player) for player in players}) != len(players):
            raise InvalidParticipantError("Duplicate players are not allowed in a match")

        rankings = [validate_participant(player, "Player") for player in players]
        self._lock(rankings)

        updates = [
            self._apply(players[i], players[j], rankings[i], rankings[j], draw=False)
            for i, j in combinations(range(len(players)), 2)
        ]
        logger.info(
            "Recorded multiplayer match players=%d pairwise_updates=%d",
            len(players),
            len(updates),
        )
        return updates

    def record_winner_vs_all(self, winner: object, losers: Sequence[object]) -> list[PairUpdate]:
        """Record ``winner`` beating every entry of ``losers``.

        Repeated losers are played once per occurrence.
        """
        losers = list(losers)
        if not losers:
            raise InvalidMatchError("Need at least 1 loser")
        if winner is None:
            raise InvalidParticipantError("Winner cannot be None")
        if any(loser is winner for loser in losers):
            raise InvalidMatchError("Winner cannot be in losers list")

        winner_ranking = validate_participant(winner, "Winner")
        loser_rankings = [validate_participant(loser, "Loser") for loser in losers]
        self._lock([winner_ranking, *loser_rankings])

        updates = [
            self._apply(winner, loser, winner_ranking, loser_ranking, draw=False)
            for loser, loser_ranking in zip(losers, loser_rankings)
        ]
        logger.info("Recorded winner-vs-all match losers=%d", len(losers))
        return updates

    def _validate_pair(
        self,
        first: object,
        second: object,
        first_role: str,
        second_role: str,
    ) -> tuple[RatingRecord, RatingRecord]:
        if first is None:
            raise InvalidParticipantError(f"{first_role} cannot be None")
        if second is None:
            raise InvalidParticipantError(f"{second_role} cannot be None")
        if first is second:
            raise InvalidParticipantError("Cannot play against yourself")
        return validate_participant(first, first_role), validate_participant(second, second_role)

    def _lock(self, rankings: Sequence[RatingRecord]) -> None:
        if self.lock_rankings is not None:
            self.lock_rankings(rankings)

    def _apply(
        self,
        first: object,
        second: object,
        first_ranking: RatingRecord,
        second_ranking: RatingRecord,
        *,
        draw: bool,
    ) -> PairUpdate:
        if draw:
            first_update, second_update = self.calculator.update_ratings_for_draw(
                first_ranking, second_ranking
            )
        else:
            first_update, second_update = self.calculator.update_ratings_for_win(
                first_ranking, second_ranking
            )

        logger.debug(
            "%s %r (%d -> %d) vs %r (%d -> %d)",
            "draw" if draw else "win",
            first,
            first_update.pre_rating,
            first_update.post_rating,
            second,
            second_update.pre_rating,
            second_update.post_rating,
        )
        return first_update, second_update


_default_recorder = MatchRecorder()


def default_recorder() -> MatchRecorder:
    """Recorder used by the module-level helpers and entity methods."""
    return _default_recorder


def record_pairwise(winner: object, loser: object) -> PairUpdate:
    return _default_recorder.record_pairwise(winner, loser)


def record_draw(first: object, second: object) -> PairUpdate:
    return _default_recorder.record_draw(first, second)


def record_multiplayer_match(players: Sequence[object]) -> list[PairUpdate]:
    return _default_recorder.record_multiplayer_match(players)


def record_winner_vs_all(winner: object, losers: Sequence[object]) -> list[PairUpdate]:
    return _default_recorder.record_winner_vs_all(winner, losers)


__all__ = [
    "MatchRecorder",
    "PairUpdate",
    "default_recorder",
    "record_draw",
    "record_multiplayer_match",
    "record_pairwise",
    "record_winner_vs_all",
    "validate_participant",
]
