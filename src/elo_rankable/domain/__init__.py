"""Rating-engine domain modules."""

from elo_rankable.domain.errors import (
    ConfigurationError,
    EloArgumentError,
    EloRankableError,
    InvalidMatchError,
    InvalidParticipantError,
    PersistenceValidationError,
)
from elo_rankable.domain.protocol import Rankable, RatingRecord

__all__ = [
    "ConfigurationError",
    "EloArgumentError",
    "EloRankableError",
    "InvalidMatchError",
    "InvalidParticipantError",
    "PersistenceValidationError",
    "Rankable",
    "RatingRecord",
]
