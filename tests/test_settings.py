"""Tests for YAML-backed settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from maxcalorie.config.settings import (
    Settings,
    default_config_path,
    get_settings,
    reload_settings,
)
from maxcalorie.optimizer.exhaustive import MAX_EXHAUSTIVE_ITEMS


class TestSettings:
    """Tests for Settings load/save."""

    def test_defaults_when_file_missing(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.database.delimiter == "^"
        assert settings.database.has_header is True
        assert settings.prefilter.max_count == 20
        assert settings.exhaustive.max_items == MAX_EXHAUSTIVE_ITEMS
        assert settings.exhaustive.time_limit is None
        assert settings.defaults.output_format == "table"
        assert settings.logging.level == "WARNING"

    def test_default_path_under_home(self, isolated_home):
        assert default_config_path() == isolated_home / ".maxcalorie" / "config.yaml"

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.dump(
                {
                    "database": {"path": "~/foods.txt"},
                    "prefilter": {"min_calories": 1, "max_count": 12},
                    "logging": {"level": "info"},
                }
            )
        )
        settings = Settings.load(path)
        assert settings.database.path == Path("~/foods.txt").expanduser()
        assert settings.prefilter.min_calories == 1.0
        assert settings.prefilter.max_calories == 2500.0
        assert settings.prefilter.max_count == 12
        assert settings.logging.level == "INFO"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path) == Settings()

    def test_save_and_load_round_trip(self, tmp_path):
        settings = Settings()
        settings.database.path = tmp_path / "foods.txt"
        settings.prefilter.max_count = 15
        settings.exhaustive.time_limit = 2.5
        settings.defaults.output_format = "json"

        path = tmp_path / "nested" / "config.yaml"
        settings.save(path)

        assert Settings.load(path) == settings

    def test_rejects_oversized_max_items(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"exhaustive": {"max_items": 64}}))
        with pytest.raises(ValueError, match="max_items"):
            Settings.load(path)

    def test_rejects_unknown_output_format(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"defaults": {"output_format": "xml"}}))
        with pytest.raises(ValueError, match="output_format"):
            Settings.load(path)

    def test_rejects_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("prefilter: [unclosed\n")
        with pytest.raises(ValueError, match="not valid YAML"):
            Settings.load(path)

    def test_rejects_null_number(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("prefilter:\n  min_calories: null\n")
        with pytest.raises(ValueError) as excinfo:
            Settings.load(path)
        assert str(path) in str(excinfo.value)

    def test_rejects_non_numeric_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"exhaustive": {"max_items": "lots"}}))
        with pytest.raises(ValueError):
            Settings.load(path)

    @pytest.mark.parametrize("content", ["- 1\n- 2\n", "42\n", "just a string\n"])
    def test_rejects_non_mapping_top_level(self, tmp_path, content):
        path = tmp_path / "config.yaml"
        path.write_text(content)
        with pytest.raises(ValueError, match="mapping at the top level"):
            Settings.load(path)

    def test_rejects_non_mapping_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"prefilter": [1, 2, 3]}))
        with pytest.raises(ValueError, match="prefilter must be a mapping"):
            Settings.load(path)

    def test_null_section_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("prefilter:\nlogging:\n  level: debug\n")
        settings = Settings.load(path)
        assert settings.prefilter == Settings().prefilter
        assert settings.logging.level == "DEBUG"


class TestGlobalSettings:
    """Tests for the lazily loaded global instance."""

    def test_get_settings_cached(self, tmp_path):
        path = tmp_path / "config.yaml"
        Settings().save(path)
        first = reload_settings(path)
        assert get_settings(path) is first

    def test_reload_picks_up_changes(self, tmp_path):
        path = tmp_path / "config.yaml"
        Settings().save(path)
        reload_settings(path)

        path.write_text(yaml.dump({"prefilter": {"max_count": 3}}))
        assert reload_settings(path).prefilter.max_count == 3
