"""Configuration loader for the interpreter."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PlaywriteConfig:
    command_delimiter: str
    catalog_path: Path
    log_level: str
    stop_on_error: bool
    log_records: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaywriteConfig":
        delimiter = str(data.get("command_delimiter", "."))
        if not delimiter:
            raise ValueError("command_delimiter must not be empty")
        return cls(
            command_delimiter=delimiter,
            catalog_path=Path(data.get("catalog_path", "config/keywords.yml")),
            log_level=str(data.get("log_level", "INFO")).upper(),
            stop_on_error=bool(data.get("stop_on_error", False)),
            log_records=bool(data.get("log_records", True)),
        )


ENV_MAP = {
    "command_delimiter": "PLAYWRITE_COMMAND_DELIMITER",
    "catalog_path": "PLAYWRITE_CATALOG_PATH",
    "log_level": "PLAYWRITE_LOG_LEVEL",
    "stop_on_error": "PLAYWRITE_STOP_ON_ERROR",
    "log_records": "PLAYWRITE_LOG_RECORDS",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        if key in {"stop_on_error", "log_records"}:
            value = value.strip().lower() in TRUE_VALUES
        merged[key] = value

    return merged


def load_config(config_path: str | Path = "config/playwrite.defaults.yml") -> PlaywriteConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return PlaywriteConfig.from_dict(data)


def default_config() -> PlaywriteConfig:
    return PlaywriteConfig.from_dict(merge_env_overrides({}))
