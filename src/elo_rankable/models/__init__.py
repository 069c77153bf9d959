"""ORM models."""

from elo_rankable.models.base import Base
from elo_rankable.models.elo_ranking import RANKABLE_TYPES, EloRanking, register_rankable_type
from elo_rankable.models.mixins import HasEloRanking

__all__ = [
    "Base",
    "EloRanking",
    "HasEloRanking",
    "RANKABLE_TYPES",
    "register_rankable_type",
]
