"""Elo configuration: defaults, process-wide current value, TOML loading."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any
import tomllib

from elo_rankable.domain.elo.k_factor import (
    DEFAULT_K_FACTOR,
    FixedKFactor,
    TieredKFactor,
    resolve_k_factor,
)
from elo_rankable.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_RATING = 1200
DEFAULT_SCALE_FACTOR = 400.0


@dataclass(frozen=True)
class EloConfig:
    """Rating policy shared by rating records, the calculator and the recorder.

    ``k_factor`` may be a policy object, a bare number or a one-argument
    callable of the current rating. It is validated when evaluated.
    """

    base_rating: int = DEFAULT_BASE_RATING
    k_factor: object = DEFAULT_K_FACTOR
    scale_factor: float = DEFAULT_SCALE_FACTOR

    def k_factor_for(self, rating: float) -> float:
        return resolve_k_factor(self.k_factor, rating)


def _validate_config(config: EloConfig) -> None:
    if isinstance(config.base_rating, bool) or not isinstance(config.base_rating, int):
        raise ConfigurationError("Base rating must be an integer")
    if config.base_rating <= 0:
        raise ConfigurationError("Base rating must be greater than 0")
    scale_factor = config.scale_factor
    if isinstance(scale_factor, bool) or not isinstance(scale_factor, (int, float)):
        raise ConfigurationError("Scale factor must be a number")
    if not math.isfinite(scale_factor) or scale_factor <= 0.0:
        raise ConfigurationError("Scale factor must be a positive finite number")


_config_lock = threading.Lock()
_current_config = EloConfig()


def get_config() -> EloConfig:
    """Return the process-wide configuration."""
    return _current_config


def configure(config: EloConfig | None = None, **changes: Any) -> EloConfig:
    """Swap the process-wide configuration.

    Pass a full ``EloConfig``, keyword overrides applied to the current value,
    or both (overrides win). The swap is atomic; matches already computing a
    pairwise update keep the value they read.
    """
    global _current_config
    with _config_lock:
        new_config = config if config is not None else _current_config
        if changes:
            try:
                new_config = replace(new_config, **changes)
            except TypeError as exc:
                raise ConfigurationError(f"Unknown Elo configuration option: {exc}") from exc
        _validate_config(new_config)
        _current_config = new_config
    logger.info(
        "Elo configuration updated base_rating=%s scale_factor=%s k_factor=%r",
        new_config.base_rating,
        new_config.scale_factor,
        new_config.k_factor,
    )
    return new_config


def reset_config() -> EloConfig:
    """Restore the default configuration."""
    return configure(EloConfig())


def load_elo_config(file_path: Path) -> EloConfig:
    """Load and validate an Elo configuration from a TOML file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_elo_config(raw, file_path)


def _parse_elo_config(raw: dict[str, Any], file_path: Path) -> EloConfig:
    elo_raw = raw.get("elo", {})

    base_rating_value = elo_raw.get("base_rating", DEFAULT_BASE_RATING)
    if isinstance(base_rating_value, bool) or not isinstance(base_rating_value, int):
        raise ConfigurationError(f"{file_path}: [elo].base_rating must be an integer")
    if base_rating_value <= 0:
        raise ConfigurationError(f"{file_path}: [elo].base_rating must be > 0")

    scale_factor = _parse_positive_float(
        elo_raw.get("scale_factor", DEFAULT_SCALE_FACTOR), "[elo].scale_factor", file_path
    )

    return EloConfig(
        base_rating=base_rating_value,
        k_factor=_parse_k_factor(elo_raw, file_path),
        scale_factor=scale_factor,
    )


def _parse_float(value: Any, label: str, file_path: Path) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{file_path}: {label} must be a number")
    if not math.isfinite(value):
        raise ConfigurationError(f"{file_path}: {label} must be a finite number")
    return float(value)


def _parse_positive_float(value: Any, label: str, file_path: Path) -> float:
    parsed = _parse_float(value, label, file_path)
    if parsed <= 0.0:
        raise ConfigurationError(f"{file_path}: {label} must be > 0")
    return parsed


def _parse_k_factor(elo_raw: dict[str, Any], file_path: Path) -> object:
    fixed_value = elo_raw.get("k_factor")
    tiers_raw = elo_raw.get("k_factor_tiers")

    if fixed_value is not None and tiers_raw is not None:
        raise ConfigurationError(
            f"{file_path}: set either [elo].k_factor or [[elo.k_factor_tiers]], not both"
        )

    if fixed_value is not None:
        return FixedKFactor(_parse_positive_float(fixed_value, "[elo].k_factor", file_path))

    if tiers_raw is None:
        return DEFAULT_K_FACTOR

    default = _parse_positive_float(
        elo_raw.get("default_k_factor", DEFAULT_K_FACTOR.default),
        "[elo].default_k_factor",
        file_path,
    )

    tiers: list[tuple[float, float]] = []
    for index, tier in enumerate(tiers_raw):
        if "above" not in tier or "k_factor" not in tier:
            raise ConfigurationError(
                f"{file_path}: [[elo.k_factor_tiers]] entry {index} needs 'above' and 'k_factor'"
            )
        label = f"[[elo.k_factor_tiers]] entry {index}"
        above = _parse_float(tier["above"], f"{label} above", file_path)
        k_factor = _parse_positive_float(tier["k_factor"], f"{label} k_factor", file_path)
        tiers.append((above, k_factor))

    return TieredKFactor(tiers=tuple(tiers), default=default)


__all__ = [
    "DEFAULT_BASE_RATING",
    "DEFAULT_SCALE_FACTOR",
    "EloConfig",
    "configure",
    "get_config",
    "load_elo_config",
    "reset_config",
]
