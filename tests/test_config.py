"""Tests for YAML config loading."""

import logging

import pytest
from mythcolor.config import (
    DEFAULT_CONFIG_PATH, DEFAULTS, ConfigError, configure_logging, load_config, log_level,
)


def _write(tmp_path, body: str):
    path = tmp_path / "mythcolor.yaml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_no_path(self):
        assert load_config() == DEFAULTS

    def test_shipped_config(self):
        assert load_config(DEFAULT_CONFIG_PATH) == DEFAULTS

    def test_override(self, tmp_path):
        config = load_config(_write(tmp_path, 'marker: "$"\ndebug: true\n'))
        assert config["marker"] == "$"
        assert config["debug"] is True
        assert config["alt_markers"] == "&"

    def test_empty_file(self, tmp_path):
        assert load_config(_write(tmp_path, "")) == DEFAULTS

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ConfigError, match="colour"):
            load_config(_write(tmp_path, "colour: red\n"))

    def test_long_marker(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, 'marker: "§§"\n'))

    def test_alnum_alt_marker(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, 'alt_markers: "a"\n'))

    def test_bracket_alt_marker(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, 'alt_markers: "<"\n'))

    def test_debug_not_bool(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, 'debug: "yes"\n'))

    def test_bad_log_level(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "log_level: LOUD\n"))

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestConfigureLogging:
    def test_debug_wins(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        configure_logging({**DEFAULTS, "debug": True})
        assert calls["level"] == logging.DEBUG

    def test_log_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        configure_logging({**DEFAULTS, "log_level": "warning"})
        assert calls["level"] == logging.WARNING
        assert "%(name)s" in calls["format"]


class TestLogLevel:
    def test_default(self):
        assert log_level(DEFAULTS) == logging.INFO

    def test_named(self):
        assert log_level({**DEFAULTS, "log_level": "error"}) == logging.ERROR

    def test_debug_overrides(self):
        assert log_level({**DEFAULTS, "debug": True, "log_level": "ERROR"}) == logging.DEBUG
