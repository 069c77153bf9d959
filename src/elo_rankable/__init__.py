"""Elo ratings for SQLAlchemy models."""

from elo_rankable.domain import (
    ConfigurationError,
    EloArgumentError,
    EloRankableError,
    InvalidMatchError,
    InvalidParticipantError,
    PersistenceValidationError,
    Rankable,
    RatingRecord,
)
from elo_rankable.domain.elo import (
    DEFAULT_K_FACTOR,
    CustomKFactor,
    EloCalculator,
    EloConfig,
    EloUpdate,
    FixedKFactor,
    MatchRecorder,
    TieredKFactor,
    calculate_expected_score,
    configure,
    get_config,
    load_elo_config,
    record_draw,
    record_multiplayer_match,
    record_pairwise,
    record_winner_vs_all,
    reset_config,
)
from elo_rankable.models import Base, EloRanking, HasEloRanking

__all__ = [
    "DEFAULT_K_FACTOR",
    "Base",
    "ConfigurationError",
    "CustomKFactor",
    "EloArgumentError",
    "EloCalculator",
    "EloConfig",
    "EloRankableError",
    "EloRanking",
    "EloUpdate",
    "FixedKFactor",
    "HasEloRanking",
    "InvalidMatchError",
    "InvalidParticipantError",
    "MatchRecorder",
    "PersistenceValidationError",
    "Rankable",
    "RatingRecord",
    "TieredKFactor",
    "calculate_expected_score",
    "configure",
    "get_config",
    "load_elo_config",
    "record_draw",
    "record_multiplayer_match",
    "record_pairwise",
    "record_winner_vs_all",
    "reset_config",
]
