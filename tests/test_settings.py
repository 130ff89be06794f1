"""Tests for settings defaults, YAML loading and validation."""

import copy
from pathlib import Path

import pytest

from fuzzy_select.errors import SettingsError
from fuzzy_select.utils.io_utils import (
    deep_merge,
    get_settings_load_count,
    load_settings,
    reload_settings,
)
from fuzzy_select.utils.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_SETTINGS,
    find_config_path,
    get_section,
    get_settings,
    tiered_value,
    validate_settings,
)

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def clear_settings_caches():
    load_settings.cache_clear()
    get_settings.cache_clear()
    yield
    load_settings.cache_clear()
    get_settings.cache_clear()


def write_yaml(tmp_path: Path, text: str) -> str:
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestGetSection:
    def test_defaults_when_no_settings(self):
        assert get_section(None, "extract") == DEFAULT_SETTINGS["extract"]

    def test_overrides_merge_over_defaults(self):
        section = get_section({"extract": {"heap_max": 10}}, "extract")
        assert section["heap_max"] == 10
        assert section["small_factor"] == DEFAULT_SETTINGS["extract"]["small_factor"]

    def test_returns_new_dict(self):
        section = get_section(None, "extract")
        section["heap_max"] = -1
        assert DEFAULT_SETTINGS["extract"]["heap_max"] == 8000

    def test_missing_section_in_settings(self):
        assert get_section({"logging": {}}, "extract_one")["linear_max"] == 20000


class TestTieredValue:
    @pytest.mark.parametrize(
        "size,expected",
        [(10, 3000), (50000, 3000), (50001, 5000), (100001, 7500), (250000, 10000)],
    )
    def test_extract_chunk_sizes(self, size, expected):
        assert tiered_value(DEFAULT_SETTINGS["extract"]["chunk_sizes"], size) == expected

    def test_unordered_tiers(self):
        assert tiered_value([[0, 1], [100, 2], [50, 3]], 75) == 3

    def test_below_every_tier(self):
        assert tiered_value([[10, 5], [20, 6]], 3) == 5


class TestLoadSettings:
    def test_deep_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        assert deep_merge(base, {"a": {"y": 3}, "c": 4}) == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_yaml_overrides_merge_with_defaults(self, tmp_path):
        path = write_yaml(tmp_path, "extract:\n  heap_max: 500\nscorer:\n  default: token_set\n")
        settings = load_settings(path)
        assert settings["extract"]["heap_max"] == 500
        assert settings["extract"]["small_factor"] == 2
        assert settings["scorer"]["default"] == "token_set"
        assert settings["extract_one"] == DEFAULT_SETTINGS["extract_one"]

    def test_defaults_are_not_mutated(self, tmp_path):
        snapshot = copy.deepcopy(DEFAULT_SETTINGS)
        load_settings(write_yaml(tmp_path, "extract:\n  heap_max: 1\n"))
        assert DEFAULT_SETTINGS == snapshot

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        settings = load_settings(str(tmp_path / "nope.yaml"))
        assert settings == DEFAULT_SETTINGS
        assert "Settings file not found" in caplog.text

    def test_empty_file_uses_defaults(self, tmp_path):
        assert load_settings(write_yaml(tmp_path, "")) == DEFAULT_SETTINGS

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(SettingsError, match="Invalid YAML"):
            load_settings(write_yaml(tmp_path, "extract: [unclosed\n"))

    def test_non_mapping(self, tmp_path):
        with pytest.raises(SettingsError, match="must contain a mapping"):
            load_settings(write_yaml(tmp_path, "- a\n- b\n"))

    def test_cached_until_reload(self, tmp_path):
        path = write_yaml(tmp_path, "extract:\n  heap_max: 1\n")
        count = get_settings_load_count()
        first = load_settings(path)
        assert load_settings(path) is first
        assert get_settings_load_count() == count + 1

        Path(path).write_text("extract:\n  heap_max: 2\n", encoding="utf-8")
        assert reload_settings(path)["extract"]["heap_max"] == 2

    def test_shipped_config_matches_defaults(self):
        assert load_settings(str(PROJECT_ROOT / "config" / "settings.yaml")) == DEFAULT_SETTINGS


class TestGetSettings:
    def test_env_var_wins(self, tmp_path, monkeypatch):
        path = write_yaml(tmp_path, "extract:\n  default_limit: 9\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, path)
        assert get_settings()["extract"]["default_limit"] == 9

    def test_found_config(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text("scorer:\n  default: partial\n", encoding="utf-8")
        nested = tmp_path / "work" / "deeper"
        nested.mkdir(parents=True)
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(nested)

        assert find_config_path() == config_dir / "settings.yaml"
        assert get_settings()["scorer"]["default"] == "partial"

    def test_defaults_without_config(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        if find_config_path() is None:
            assert get_settings() == DEFAULT_SETTINGS


class TestValidateSettings:
    def test_defaults_are_valid(self):
        assert validate_settings(copy.deepcopy(DEFAULT_SETTINGS)) == []

    def test_reports_bad_values(self):
        warnings = validate_settings(
            {
                "extract": {"heap_max": 0, "early_exit_score": 150, "chunk_sizes": [[0, 0]]},
                "extract_one": {"early_exit_fraction": 1.5, "random_seed": -1},
                "cache": {"ttl_seconds": 0},
            },
        )
        joined = "\n".join(warnings)
        assert "extract.heap_max" in joined
        assert "extract.early_exit_score" in joined
        assert "extract.chunk_sizes values" in joined
        assert "extract_one.early_exit_fraction" in joined
        assert "extract_one.random_seed" in joined
        assert "cache.ttl_seconds" in joined
        assert len(warnings) == 6

    def test_malformed_tiers(self):
        warnings = validate_settings({"extract_one": {"extra_samples": [[1, 2, 3]]}})
        assert warnings == ["extract_one.extra_samples entries must be [n_above, value] pairs, got [1, 2, 3]"]

    def test_empty_tiers(self):
        warnings = validate_settings({"extract": {"chunk_sizes": []}})
        assert warnings == ["extract.chunk_sizes must be a non-empty list of [n_above, value] pairs"]
