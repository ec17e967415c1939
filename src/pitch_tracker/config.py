from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from pitch_tracker.exceptions import ConfigError


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_DEFAULTS: dict[str, object] = {
    "storage": {
        "db_path": "~/.config/pitch-tracker/session.db",
        "namespace": "pitch_tracker",
        "key": "v1",
    },
    "display": {
        "recent_limit": 12,
    },
}


@dataclass(frozen=True)
class TrackerSettings:
    db_path: Path
    namespace: str
    key: str
    recent_limit: int


def create_config(
    yaml_path: str = "pitch_tracker.yaml",
    env_prefix: str = "PITCH_TRACKER",
    defaults: dict[str, object] | None = None,
    *,
    db_path: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables.
        defaults: Default configuration values.
        db_path: Override the storage database path.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]

    if db_path is not None:
        layers.insert(0, config_from_dict({"storage": {"db_path": db_path}}))

    return ConfigurationSet(*layers)


def load_settings(cfg: AppConfig | None = None) -> TrackerSettings:
    if cfg is None:
        cfg = create_config()
    raw_limit = str(cfg["display.recent_limit"])
    try:
        recent_limit = int(raw_limit)
    except ValueError:
        raise ConfigError(f"display.recent_limit must be an integer, got '{raw_limit}'") from None
    if recent_limit <= 0:
        raise ConfigError(f"display.recent_limit must be > 0, got {recent_limit}")
    return TrackerSettings(
        db_path=Path(str(cfg["storage.db_path"])).expanduser(),
        namespace=str(cfg["storage.namespace"]),
        key=str(cfg["storage.key"]),
        recent_limit=recent_limit,
    )
