"""Tests for cronexpr.config."""

from pathlib import Path

import pytest

from cronexpr import config as config_module
from cronexpr.config import Config, load_config, update_config_from_dict
from cronexpr.presets import PRESETS


def test_default_config():
    """Default config should have sensible values."""
    config = Config()
    assert config.engine.occurrence_count == 5
    assert config.engine.max_probes == 100
    assert config.server.port == 8765
    assert config.server.timezone == ""
    assert config.all_presets() == PRESETS


def test_load_config_missing_file():
    """Loading from a non-existent file should return defaults."""
    config = load_config(Path("/nonexistent/config.yaml"))
    assert config.engine.occurrence_count == 5


def test_load_config_file(tmp_path):
    """Values from YAML should override defaults, unknown keys ignored."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "engine:\n"
        "  occurrence_count: 10\n"
        "  unknown_key: 1\n"
        "server:\n"
        "  port: 9000\n"
        "  timezone: Europe/Paris\n"
        "presets:\n"
        "  - label: Every 6 hours\n"
        "    expression: '0 */6 * * *'\n"
        "  - label: Broken\n"
    )
    config = load_config(config_file)
    assert config.engine.occurrence_count == 10
    assert config.engine.max_probes == 100
    assert config.server.port == 9000
    assert config.server.timezone == "Europe/Paris"
    assert [p.label for p in config.presets] == ["Every 6 hours"]
    assert config.all_presets()[-1].expression == "0 */6 * * *"


def test_load_empty_config_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    assert load_config(config_file) == Config()


def test_example_config_loads():
    config = load_config(config_module.EXAMPLE_CONFIG_PATH)
    assert config.engine.max_probes == 100
    assert len(config.presets) == 2


def test_update_config_from_dict(monkeypatch):
    """Runtime updates should only touch known sections and keys."""
    monkeypatch.setattr(config_module, "_config", Config())
    config = update_config_from_dict({
        "engine": {"occurrence_count": 3, "bogus": True},
        "nonexistent": {"x": 1},
    })
    assert config.engine.occurrence_count == 3
    assert not hasattr(config.engine, "bogus")
