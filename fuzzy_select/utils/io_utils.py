"""IO utilities for settings files and candidate lists."""

import copy
import functools
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

from fuzzy_select.errors import SettingsError
from fuzzy_select.utils.logging_utils import get_logger
from fuzzy_select.utils.settings import DEFAULT_SETTINGS

logger = get_logger(__name__)

# Settings loading counter for debugging
_settings_load_count = 0


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge update into base, in place, and return base."""
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


@functools.lru_cache(maxsize=8)
def load_settings(path: str) -> dict[str, Any]:
    """Load settings from YAML file with defaults.

    This function is cached to prevent repeated file I/O and parsing.
    Use reload_settings() to force a fresh load. Callers must treat the
    returned dict as read-only.

    Args:
        path: Path to settings YAML file

    Returns:
        Dictionary with settings (user config merged over defaults)

    Raises:
        SettingsError: If the file exists but is not valid YAML or not a mapping

    """
    global _settings_load_count
    _settings_load_count += 1

    logger.debug(f"Settings loaded (count: {_settings_load_count}) from {path}")

    defaults = copy.deepcopy(DEFAULT_SETTINGS)

    try:
        with open(path, encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return defaults
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file {path}: {e}") from e

    if not isinstance(user_config, dict):
        raise SettingsError(
            f"Settings file {path} must contain a mapping, got {type(user_config).__name__}",
        )

    return deep_merge(defaults, user_config)


def reload_settings(path: str) -> dict[str, Any]:
    """Force reload settings from file (clears cache).

    Args:
        path: Path to settings YAML file

    Returns:
        Freshly loaded settings

    """
    load_settings.cache_clear()
    return load_settings(path)


def get_settings_load_count() -> int:
    """Get the total number of times settings have been loaded (for debugging)."""
    return _settings_load_count


def read_candidates(file_path: str, column: Optional[str] = None) -> list[str]:
    """Read candidate strings from a CSV or plain-text file.

    CSV files are read with pandas; the named column (default: the first
    column) is used, missing values are dropped and everything is cast to
    str. Any other extension is read as one candidate per line, skipping
    blank lines.

    Args:
        file_path: Path to the candidates file
        column: CSV column holding the candidates

    Returns:
        Candidate strings in file order

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the requested column is not in the CSV
        UnicodeDecodeError: If the file is not valid UTF-8

    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Candidates file not found: {file_path}")

    if path.suffix.lower() == ".csv":
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=True)
        except pd.errors.EmptyDataError:
            logger.warning(f"Candidates file is empty: {file_path}")
            return []
        if column is None:
            column = df.columns[0]
        elif column not in df.columns:
            raise KeyError(
                f"Column '{column}' not found in {file_path}. "
                f"Available columns: {', '.join(map(str, df.columns))}",
            )
        series = df[column].dropna().astype(str)
        logger.info(f"Read {len(series)} candidates from column '{column}' of {file_path}")
        return series.tolist()

    with open(path, encoding="utf-8") as f:
        candidates = [line.rstrip("\r\n") for line in f if line.strip()]
    logger.info(f"Read {len(candidates)} candidates from {file_path}")
    return candidates
