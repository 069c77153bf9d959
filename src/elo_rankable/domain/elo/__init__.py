"""Elo rating modules."""

from elo_rankable.domain.elo.calculator import (
    EloCalculator,
    EloUpdate,
    calculate_expected_score,
    compute_update,
    round_rating,
)
from elo_rankable.domain.elo.config import (
    EloConfig,
    configure,
    get_config,
    load_elo_config,
    reset_config,
)
from elo_rankable.domain.elo.k_factor import (
    DEFAULT_K_FACTOR,
    CustomKFactor,
    FixedKFactor,
    KFactorPolicy,
    TieredKFactor,
    resolve_k_factor,
)
from elo_rankable.domain.elo.matches import (
    MatchRecorder,
    default_recorder,
    record_draw,
    record_multiplayer_match,
    record_pairwise,
    record_winner_vs_all,
    validate_participant,
)

__all__ = [
    "DEFAULT_K_FACTOR",
    "CustomKFactor",
    "EloCalculator",
    "EloConfig",
    "EloUpdate",
    "FixedKFactor",
    "KFactorPolicy",
    "MatchRecorder",
    "TieredKFactor",
    "calculate_expected_score",
    "compute_update",
    "configure",
    "default_recorder",
    "get_config",
    "load_elo_config",
    "record_draw",
    "record_multiplayer_match",
    "record_pairwise",
    "record_winner_vs_all",
    "reset_config",
    "resolve_k_factor",
    "round_rating",
    "validate_participant",
]
