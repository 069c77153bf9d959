"""Elo expectation and rating update logic."""

from __future__ import annotations

import math
from dataclasses import dataclass

from elo_rankable.domain.elo.config import EloConfig, get_config
from elo_rankable.domain.protocol import RatingRecord

WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0


@dataclass(frozen=True)
class EloUpdate:
    pre_rating: int
    opponent_pre_rating: int
    actual_score: float
    expected_score: float
    k_factor: float
    rating_delta: float
    post_rating: int


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = 400.0,
) -> float:
    """Compute the Elo expected score for one side.

    The power of ten is always taken on a non-positive exponent so that huge
    rating gaps or small scale factors saturate at 0.0 or 1.0 instead of
    overflowing.
    """
    exponent = (opponent_rating - rating) / scale_factor
    if exponent > 0.0:
        odds = 10.0 ** -exponent
        return odds / (1.0 + odds)
    return 1.0 / (1.0 + 10.0 ** exponent)


def round_rating(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_update(
    rating: int,
    opponent_rating: int,
    *,
    actual_score: float,
    k_factor: float,
    scale_factor: float = 400.0,
) -> EloUpdate:
    expected_score = calculate_expected_score(rating, opponent_rating, scale_factor)
    rating_delta = k_factor * (actual_score - expected_score)
    return EloUpdate(
        pre_rating=rating,
        opponent_pre_rating=opponent_rating,
        actual_score=actual_score,
        expected_score=expected_score,
        k_factor=k_factor,
        rating_delta=rating_delta,
        post_rating=round_rating(rating + rating_delta),
    )


class EloCalculator:
    """Applies pairwise Elo outcomes to rating records.

    Without an explicit ``config`` the process-wide configuration is read at
    every update, so ``configure()`` takes effect immediately.
    """

    def __init__(self, config: EloConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> EloConfig:
        return self._config if self._config is not None else get_config()

    def expected_score(self, rating: float, opponent_rating: float) -> float:
        return calculate_expected_score(rating, opponent_rating, self.config.scale_factor)

    def update_ratings_for_win(
        self,
        winner: RatingRecord,
        loser: RatingRecord,
    ) -> tuple[EloUpdate, EloUpdate]:
        return self._update_pair(winner, loser, first_score=WIN_SCORE, second_score=LOSS_SCORE)

    def update_ratings_for_draw(
        self,
        first: RatingRecord,
        second: RatingRecord,
    ) -> tuple[EloUpdate, EloUpdate]:
        return self._update_pair(first, second, first_score=DRAW_SCORE, second_score=DRAW_SCORE)

    def _update_pair(
        self,
        first: RatingRecord,
        second: RatingRecord,
        *,
        first_score: float,
        second_score: float,
    ) -> tuple[EloUpdate, EloUpdate]:
        config = self.config
        first_pre = first.rating
        second_pre = second.rating

        # Both sides are computed from the pre-update snapshot before either record is written.
        first_update = compute_update(
            first_pre,
            second_pre,
            actual_score=first_score,
            k_factor=first.k_factor(config),
            scale_factor=config.scale_factor,
        )
        second_update = compute_update(
            second_pre,
            first_pre,
            actual_score=second_score,
            k_factor=second.k_factor(config),
            scale_factor=config.scale_factor,
        )

        # A pair is applied whole or not at all.
        first.check_result(first_update.post_rating)
        second.check_result(second_update.post_rating)
        first.apply_result(first_update.post_rating)
        second.apply_result(second_update.post_rating)
        return first_update, second_update


__all__ = [
    "DRAW_SCORE",
    "EloCalculator",
    "EloUpdate",
    "LOSS_SCORE",
    "WIN_SCORE",
    "calculate_expected_score",
    "compute_update",
    "round_rating",
]
