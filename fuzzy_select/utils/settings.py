"""
Settings management for fuzzy_select.

This module provides the default settings, section lookups with defaults
filled in, and validation of user-supplied values. The selection engine
only ever reads settings handed to it; file and environment lookups
happen in get_settings().
"""

import copy
import os
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

__all__ = [
    "DEFAULT_SETTINGS",
    "CONFIG_ENV_VAR",
    "find_config_path",
    "get_section",
    "get_settings",
    "tiered_value",
    "validate_settings",
]

CONFIG_ENV_VAR = "FUZZY_SELECT_CONFIG"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "extract": {
        "default_limit": 5,
        # n <= small_factor * limit is scored with a plain full sort
        "small_factor": 2,
        "heap_max": 8000,
        # [n_above, chunk_size], checked top-down
        "chunk_sizes": [[200000, 10000], [100000, 7500], [50000, 5000], [0, 3000]],
        "early_exit_fraction": 0.2,
        "early_exit_score": 93,
        "confirmation_chunks": 2,
    },
    "extract_one": {
        "linear_max": 20000,
        "extra_samples": [[200000, 50], [100000, 30], [50000, 20], [0, 15]],
        "strategic_positions": [0.1, 0.2, 0.3, 0.5, 0.7, 0.9, 1.0],
        "verify_min_size": 100000,
        "verify_score": 98,
        "verify_samples": 100,
        "chunk_sizes": [[200000, 20000], [100000, 15000], [0, 10000]],
        "early_exit_fraction": 0.15,
        "early_exit_fraction_large": 0.10,
        "early_exit_score": 97,
        "final_samples": 200,
        "final_sample_stride": 50,
        "random_seed": 0,
    },
    "scorer": {"default": "weighted"},
    "cache": {"max_size": 1000, "ttl_seconds": None},
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


def get_section(settings: Optional[Dict[str, Any]], section: str) -> Dict[str, Any]:
    """Return one settings section with defaults filled in.

    Precedence order: settings > defaults

    Args:
        settings: Settings dict, or None for pure defaults
        section: Top-level section name (e.g. "extract")

    Returns:
        New dict; mutating it does not touch either input

    """
    merged = dict(DEFAULT_SETTINGS.get(section, {}))
    if settings:
        merged.update(settings.get(section) or {})
    return merged


def tiered_value(tiers: Sequence[Sequence[float]], size: int) -> int:
    """Pick the value of the first tier whose lower bound the size exceeds.

    Args:
        tiers: ``[[n_above, value], ...]`` pairs
        size: Collection size being classified

    Returns:
        The matching tier value, or the smallest tier's value

    """
    ordered = sorted(tiers, key=lambda tier: tier[0], reverse=True)
    for n_above, value in ordered:
        if size > n_above:
            return int(value)
    return int(ordered[-1][1])


def find_config_path(filename: str = "settings.yaml") -> Optional[Path]:
    """Look for config/<filename> in the working directory and its parents."""
    current = Path.cwd()
    for parent in [current] + list(current.parents):
        candidate = parent / "config" / filename
        if candidate.exists():
            return candidate
    return None


@lru_cache(maxsize=1)
def get_settings() -> Dict[str, Any]:
    """Get application settings with caching.

    Order of lookup: $FUZZY_SELECT_CONFIG, config/settings.yaml found from
    the working directory, then built-in defaults.
    """
    from fuzzy_select.utils.io_utils import load_settings

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_settings(env_path)

    found = find_config_path()
    if found is not None:
        return load_settings(str(found))

    return copy.deepcopy(DEFAULT_SETTINGS)


def _check_tiers(name: str, tiers: Any, warnings: List[str]) -> None:
    if not isinstance(tiers, list) or not tiers:
        warnings.append(f"{name} must be a non-empty list of [n_above, value] pairs")
        return
    for tier in tiers:
        if not isinstance(tier, (list, tuple)) or len(tier) != 2:
            warnings.append(f"{name} entries must be [n_above, value] pairs, got {tier}")
        elif not isinstance(tier[1], int) or tier[1] < 1:
            warnings.append(f"{name} values must be int >= 1, got {tier[1]}")


def _check_score(name: str, value: Any, warnings: List[str]) -> None:
    if not isinstance(value, (int, float)) or value < 0 or value > 100:
        warnings.append(f"{name} must be number 0-100, got {value}")


def _check_fraction(name: str, value: Any, warnings: List[str]) -> None:
    if not isinstance(value, (int, float)) or value <= 0 or value > 1:
        warnings.append(f"{name} must be number in (0, 1], got {value}")


def _check_positive_int(name: str, value: Any, warnings: List[str]) -> None:
    if not isinstance(value, int) or value < 1:
        warnings.append(f"{name} must be int >= 1, got {value}")


def validate_settings(settings: Optional[Dict[str, Any]] = None) -> List[str]:
    """Returns list of validation warnings.

    Args:
        settings: Settings dict to validate. If None, uses get_settings().

    Returns:
        List of validation warning messages.
    """
    warnings: List[str] = []
    if settings is None:
        settings = get_settings()

    extract = get_section(settings, "extract")
    _check_positive_int("extract.default_limit", extract["default_limit"], warnings)
    _check_positive_int("extract.small_factor", extract["small_factor"], warnings)
    _check_positive_int("extract.heap_max", extract["heap_max"], warnings)
    _check_tiers("extract.chunk_sizes", extract["chunk_sizes"], warnings)
    _check_fraction("extract.early_exit_fraction", extract["early_exit_fraction"], warnings)
    _check_score("extract.early_exit_score", extract["early_exit_score"], warnings)
    confirmation = extract["confirmation_chunks"]
    if not isinstance(confirmation, int) or confirmation < 0:
        warnings.append(f"extract.confirmation_chunks must be int >= 0, got {confirmation}")

    extract_one = get_section(settings, "extract_one")
    _check_positive_int("extract_one.linear_max", extract_one["linear_max"], warnings)
    _check_tiers("extract_one.extra_samples", extract_one["extra_samples"], warnings)
    _check_tiers("extract_one.chunk_sizes", extract_one["chunk_sizes"], warnings)
    for position in extract_one["strategic_positions"]:
        _check_fraction("extract_one.strategic_positions", position, warnings)
    _check_score("extract_one.verify_score", extract_one["verify_score"], warnings)
    _check_score("extract_one.early_exit_score", extract_one["early_exit_score"], warnings)
    _check_fraction("extract_one.early_exit_fraction", extract_one["early_exit_fraction"], warnings)
    _check_fraction(
        "extract_one.early_exit_fraction_large",
        extract_one["early_exit_fraction_large"],
        warnings,
    )
    _check_positive_int("extract_one.verify_samples", extract_one["verify_samples"], warnings)
    _check_positive_int("extract_one.final_samples", extract_one["final_samples"], warnings)
    _check_positive_int(
        "extract_one.final_sample_stride", extract_one["final_sample_stride"], warnings
    )
    seed = extract_one["random_seed"]
    if seed is not None and (not isinstance(seed, int) or seed < 0):
        warnings.append(f"extract_one.random_seed must be null or int >= 0, got {seed}")

    cache = get_section(settings, "cache")
    _check_positive_int("cache.max_size", cache["max_size"], warnings)
    ttl = cache["ttl_seconds"]
    if ttl is not None and (not isinstance(ttl, (int, float)) or ttl <= 0):
        warnings.append(f"cache.ttl_seconds must be null or number > 0, got {ttl}")

    return warnings
