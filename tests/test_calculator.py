"""Unit tests for Elo calculations."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from elo_rankable.domain.elo.calculator import (
    EloCalculator,
    calculate_expected_score,
    compute_update,
    round_rating,
)
from elo_rankable.domain.elo.config import EloConfig, get_config
from elo_rankable.domain.elo.k_factor import FixedKFactor


@dataclass
class InMemoryRecord:
    rating: int
    games_played: int = 0

    def k_factor(self, config: EloConfig | None = None) -> float:
        return (config or get_config()).k_factor_for(self.rating)

    def check_result(self, new_rating: int) -> None:
        if new_rating <= 0:
            raise ValueError("Rating must be greater than 0")

    def apply_result(self, new_rating: int) -> None:
        self.rating = new_rating
        self.games_played += 1

    def is_persisted(self) -> bool:
        return True


def test_expected_score_equal_ratings_is_half() -> None:
    assert calculate_expected_score(1500.0, 1500.0) == pytest.approx(0.5)


@pytest.mark.parametrize(
    ("rating_a", "rating_b"),
    [(1600.0, 1500.0), (1200.0, 2400.0), (100.0, 3000.0), (1337.0, 1336.0)],
)
def test_expected_scores_sum_to_one(rating_a: float, rating_b: float) -> None:
    expected_a = calculate_expected_score(rating_a, rating_b)
    expected_b = calculate_expected_score(rating_b, rating_a)
    assert expected_a + expected_b == pytest.approx(1.0)
    assert 0.0 < expected_a < 1.0


def test_scale_factor_flattens_expectation() -> None:
    narrow = calculate_expected_score(1600.0, 1500.0, scale_factor=400.0)
    wide = calculate_expected_score(1600.0, 1500.0, scale_factor=800.0)
    assert 0.5 < wide < narrow


def test_round_rating_rounds_half_away_from_zero() -> None:
    assert round_rating(1215.5) == 1216
    assert round_rating(1216.4) == 1216
    assert round_rating(2.5) == 3
    assert round_rating(-2.5) == -3
    assert round_rating(0.0) == 0


def test_compute_update_for_even_win() -> None:
    update = compute_update(1200, 1200, actual_score=1.0, k_factor=32.0)
    assert update.expected_score == pytest.approx(0.5)
    assert update.rating_delta == pytest.approx(16.0)
    assert update.post_rating == 1216


def test_win_between_new_players_matches_reference_numbers() -> None:
    winner = InMemoryRecord(1200)
    loser = InMemoryRecord(1200)

    winner_update, loser_update = EloCalculator().update_ratings_for_win(winner, loser)

    assert winner.rating == 1216
    assert loser.rating == 1184
    assert winner.games_played == 1
    assert loser.games_played == 1
    assert winner_update.post_rating - winner_update.pre_rating == 16
    assert loser_update.pre_rating - loser_update.post_rating == 16


def test_both_sides_use_pre_update_ratings() -> None:
    winner = InMemoryRecord(1200)
    loser = InMemoryRecord(1200)

    _, loser_update = EloCalculator().update_ratings_for_win(winner, loser)

    assert loser_update.opponent_pre_rating == 1200
    assert loser_update.expected_score == pytest.approx(0.5)


def test_favourite_win_is_zero_sum_with_equal_k_factors() -> None:
    winner = InMemoryRecord(1400)
    loser = InMemoryRecord(1000)

    EloCalculator().update_ratings_for_win(winner, loser)

    assert winner.rating == 1403
    assert loser.rating == 997
    assert winner.rating + loser.rating == 2400


def test_k_factor_tiers_break_zero_sum() -> None:
    winner = InMemoryRecord(2000)
    loser = InMemoryRecord(2401)

    winner_update, loser_update = EloCalculator().update_ratings_for_win(winner, loser)

    assert winner_update.k_factor == pytest.approx(32.0)
    assert loser_update.k_factor == pytest.approx(10.0)
    assert winner.rating == 2029
    assert loser.rating == 2392
    assert winner.rating - 2000 != 2401 - loser.rating


def test_win_never_lowers_winner_or_raises_loser() -> None:
    calculator = EloCalculator()
    for winner_rating, loser_rating in [(1200, 1200), (3000, 100), (100, 3000), (2401, 2399)]:
        winner = InMemoryRecord(winner_rating)
        loser = InMemoryRecord(loser_rating)
        calculator.update_ratings_for_win(winner, loser)
        assert winner.rating >= winner_rating
        assert loser.rating <= loser_rating


def test_draw_between_equal_ratings_barely_moves() -> None:
    first = InMemoryRecord(1200)
    second = InMemoryRecord(1200)

    EloCalculator().update_ratings_for_draw(first, second)

    assert abs(first.rating - 1200) < 5
    assert abs(second.rating - 1200) < 5
    assert first.games_played == 1
    assert second.games_played == 1


def test_draw_moves_unequal_ratings_towards_each_other() -> None:
    higher = InMemoryRecord(1400)
    lower = InMemoryRecord(1000)

    higher_update, lower_update = EloCalculator().update_ratings_for_draw(higher, lower)

    assert higher.rating == 1387
    assert lower.rating == 1013
    assert higher_update.actual_score == pytest.approx(0.5)
    assert lower_update.actual_score == pytest.approx(0.5)


def test_injected_config_overrides_process_config() -> None:
    calculator = EloCalculator(EloConfig(k_factor=FixedKFactor(10.0)))
    winner = InMemoryRecord(1200)
    loser = InMemoryRecord(1200)

    calculator.update_ratings_for_win(winner, loser)

    assert winner.rating == 1205
    assert loser.rating == 1195
    assert calculator.config.k_factor == FixedKFactor(10.0)


@pytest.mark.parametrize(
    ("rating_a", "rating_b", "scale_factor"),
    [
        (100.0, 200000.0, 400.0),
        (200000.0, 100.0, 400.0),
        (1200.0, 1600.0, 1.0),
        (1.0, 1e300, 1e-3),
    ],
)
def test_extreme_gaps_saturate_instead_of_overflowing(
    rating_a: float,
    rating_b: float,
    scale_factor: float,
) -> None:
    expected_a = calculate_expected_score(rating_a, rating_b, scale_factor)
    expected_b = calculate_expected_score(rating_b, rating_a, scale_factor)
    assert expected_a + expected_b == pytest.approx(1.0)
    assert 0.0 <= expected_a <= 1.0
    if rating_a < rating_b:
        assert expected_a == pytest.approx(0.0)
    else:
        assert expected_a == pytest.approx(1.0)


def test_small_scale_factor_update_is_applied() -> None:
    calculator = EloCalculator(EloConfig(scale_factor=1.0))
    winner = InMemoryRecord(1200)
    loser = InMemoryRecord(1600)

    winner_update, _ = calculator.update_ratings_for_win(winner, loser)

    assert winner_update.expected_score == pytest.approx(0.0)
    assert winner.rating == 1232
    assert loser.rating == 1568


def test_rejected_post_rating_leaves_both_records_untouched() -> None:
    calculator = EloCalculator(EloConfig(k_factor=FixedKFactor(5000.0)))
    winner = InMemoryRecord(1200)
    loser = InMemoryRecord(1200)

    with pytest.raises(ValueError, match="Rating must be greater than 0"):
        calculator.update_ratings_for_win(winner, loser)

    assert winner.rating == 1200
    assert winner.games_played == 0
    assert loser.rating == 1200
    assert loser.games_played == 0
