"""Exception hierarchy for Elo rating operations."""

from __future__ import annotations


class EloRankableError(Exception):
    """Base class for every error raised by elo_rankable."""


class InvalidMatchError(EloRankableError):
    """The shape of a match is illegal (too few players, winner among losers, ...)."""


class EloArgumentError(EloRankableError, ValueError):
    """A caller passed an argument the rating engine cannot work with."""


class InvalidParticipantError(EloArgumentError):
    """A match participant failed validation."""


class ConfigurationError(EloArgumentError):
    """Rating configuration is malformed or evaluates to an unusable value."""


class PersistenceValidationError(EloRankableError):
    """Storage rejected a rating record write."""


__all__ = [
    "ConfigurationError",
    "EloArgumentError",
    "EloRankableError",
    "InvalidMatchError",
    "InvalidParticipantError",
    "PersistenceValidationError",
]
