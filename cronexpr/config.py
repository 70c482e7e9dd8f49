"""Configuration loader for the cron expression tool."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cronexpr.occurrences import DEFAULT_COUNT, MAX_PROBES
from cronexpr.presets import PRESETS, Preset

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"
EXAMPLE_CONFIG_PATH = Path(__file__).parent.parent / "config.example.yaml"


@dataclass
class EngineConfig:
    occurrence_count: int = DEFAULT_COUNT
    max_probes: int = MAX_PROBES


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "info"
    # IANA zone for calendar fields; empty means the system zone
    timezone: str = ""


@dataclass
class Config:
    """Application configuration."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    # Appended to the built-in preset library
    presets: list[Preset] = field(default_factory=list)

    def all_presets(self) -> tuple[Preset, ...]:
        return PRESETS + tuple(self.presets)


def _dict_to_dataclass(cls: type, data: dict[str, Any]) -> Any:
    """Convert a dict to a dataclass, ignoring unknown fields."""
    if not data:
        return cls()
    valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return cls(**filtered)


def _load_presets(entries: list[dict[str, Any]]) -> list[Preset]:
    presets = []
    for entry in entries or []:
        label = entry.get("label")
        expression = entry.get("expression")
        if not label or not expression:
            logger.warning("Skipping preset without label or expression: %s", entry)
            continue
        presets.append(Preset(str(label), str(expression).strip()))
    return presets


def load_config(path: Path | None = None) -> Config:
    """Load configuration from YAML file.

    Falls back to defaults if config file doesn't exist.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        logger.warning(
            "Config file not found at %s. Using defaults. "
            "Copy config.example.yaml to config.yaml to customize.",
            config_path,
        )
        return Config()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded config from %s", config_path)
    return Config(
        engine=_dict_to_dataclass(EngineConfig, raw.get("engine", {})),
        server=_dict_to_dataclass(ServerConfig, raw.get("server", {})),
        presets=_load_presets(raw.get("presets", [])),
    )


# Singleton config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance, loading it on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def update_config_from_dict(updates: dict[str, Any]) -> Config:
    """Update the runtime config from a dict (e.g., from a client).

    Does not persist to disk.
    """
    global _config
    if _config is None:
        _config = load_config()

    for section, values in updates.items():
        if hasattr(_config, section) and isinstance(values, dict):
            section_obj = getattr(_config, section)
            for key, value in values.items():
                if hasattr(section_obj, key):
                    setattr(section_obj, key, value)

    return _config
