"""Database repository helpers."""

from elo_rankable.repositories.elo_ranking_repository import (
    DEFAULT_LEADERBOARD_LIMIT,
    by_elo_rating,
    count_rankings,
    ensure_elo_ranking_schema,
    find_ranking,
    lock_rankings_for_update,
    top_rankings,
    top_rated,
)

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
