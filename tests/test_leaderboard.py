"""Tests for leaderboard queries."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlalchemy.orm import Session

from elo_rankable.repositories import by_elo_rating, count_rankings, top_rankings, top_rated
from rankable_models import Player, Team


@pytest.fixture
def rated_players(
    session: Session,
    make_player: Callable[[str], Player],
    make_team: Callable[[str], Team],
) -> tuple[Player, Player, Player]:
    alice = make_player("Alice")
    bob = make_player("Bob")
    charlie = make_player("Charlie")
    alice.get_elo_ranking().rating = 1500
    bob.get_elo_ranking().rating = 1300
    charlie.get_elo_ranking().rating = 1400

    alpha = make_team("Team Alpha")
    alpha.get_elo_ranking().rating = 2000
    session.flush()
    return alice, bob, charlie


def test_orders_players_by_elo_rating(
    session: Session,
    rated_players: tuple[Player, Player, Player],
) -> None:
    alice, bob, charlie = rated_players
    assert list(session.scalars(Player.by_elo_rating())) == [alice, charlie, bob]
    assert list(session.scalars(by_elo_rating(Player))) == [alice, charlie, bob]


def test_top_rated_limits_results(
    session: Session,
    rated_players: tuple[Player, Player, Player],
) -> None:
    alice, _, charlie = rated_players
    assert Player.top_rated(session, 2) == [alice, charlie]
    assert top_rated(session, Player, limit=1) == [alice]


def test_players_without_ranking_are_not_listed(
    session: Session,
    make_player: Callable[[str], Player],
    rated_players: tuple[Player, Player, Player],
) -> None:
    make_player("Unrated")
    assert len(Player.top_rated(session, 10)) == 3


def test_top_rankings_across_types(
    session: Session,
    rated_players: tuple[Player, Player, Player],
) -> None:
    rankings = top_rankings(session, limit=2)
    assert [(ranking.rankable_type, ranking.rating) for ranking in rankings] == [
        ("Team", 2000),
        ("Player", 1500),
    ]

    player_rankings = top_rankings(session, rankable_type="Player")
    assert [ranking.rating for ranking in player_rankings] == [1500, 1400, 1300]
    assert count_rankings(session) == 4
    assert count_rankings(session, rankable_type="Team") == 1
