"""K-factor policies: fixed, tiered by rating, or a custom function of rating."""

from __future__ import annotations

import inspect
import math
from collections.abc import Callable
from dataclasses import dataclass
from numbers import Real

from elo_rankable.domain.errors import ConfigurationError


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _checked_k_factor(value: object) -> float:
    if not _is_number(value):
        raise ConfigurationError("K-factor strategy must return a number")
    k_factor = float(value)  # type: ignore[arg-type]
    if not math.isfinite(k_factor) or k_factor <= 0.0:
        raise ConfigurationError("K-factor must be a positive finite number")
    return k_factor


@dataclass(frozen=True)
class FixedKFactor:
    """Same K-factor at every rating."""

    value: float

    def resolve(self, rating: float) -> float:
        return _checked_k_factor(self.value)


@dataclass(frozen=True)
class TieredKFactor:
    """K-factor picked by the highest threshold the rating is strictly above.

    ``tiers`` holds ``(threshold, k_factor)`` pairs in any order; ratings at or
    below every threshold use ``default``.
    """

    tiers: tuple[tuple[float, float], ...]
    default: float = 32.0

    def resolve(self, rating: float) -> float:
        for threshold, k_factor in sorted(self.tiers, key=lambda tier: tier[0], reverse=True):
            if rating > threshold:
                return _checked_k_factor(k_factor)
        return _checked_k_factor(self.default)


@dataclass(frozen=True)
class CustomKFactor:
    """K-factor computed by a single-argument callable of the current rating."""

    func: Callable[[float], float]

    def resolve(self, rating: float) -> float:
        try:
            signature = inspect.signature(self.func)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            try:
                signature.bind(rating)
            except TypeError as exc:
                raise ConfigurationError(
                    "K-factor strategy must accept exactly one argument (the current rating)"
                ) from exc
        return _checked_k_factor(self.func(rating))


KFactorPolicy = FixedKFactor | TieredKFactor | CustomKFactor

DEFAULT_K_FACTOR = TieredKFactor(tiers=((2400.0, 10.0), (2000.0, 20.0)), default=32.0)


def resolve_k_factor(strategy: object, rating: float) -> float:
    """Evaluate a K-factor strategy for ``rating``.

    Bare numbers and callables are accepted alongside the policy classes.
    Anything else is only detected here, at evaluation time.
    """
    if isinstance(strategy, (FixedKFactor, TieredKFactor, CustomKFactor)):
        return strategy.resolve(rating)
    if _is_number(strategy):
        return _checked_k_factor(strategy)
    if callable(strategy):
        return CustomKFactor(strategy).resolve(rating)
    raise ConfigurationError("K-factor strategy must be a callable or a number")


__all__ = [
    "DEFAULT_K_FACTOR",
    "CustomKFactor",
    "FixedKFactor",
    "KFactorPolicy",
    "TieredKFactor",
    "resolve_k_factor",
]
