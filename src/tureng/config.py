"""Configuration for tureng. Read from ~/.tureng/config.json."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from tureng.api.types import Lang


@dataclass
class Config:
    """User defaults; command-line flags take precedence."""

    lang: Lang = field(default_factory=Lang.default)
    limit: int = 9
    debounce_ms: int = 250
    tick_ms: int = 20
    timeout: float = 10.0

    def merged(self, **overrides: Any) -> Config:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _get_config_dir() -> Path:
    return Path(os.environ.get("TURENG_CONFIG_DIR", Path.home() / ".tureng"))


def _get_config_path() -> Path:
    return _get_config_dir() / "config.json"


def config_from_dict(data: dict[str, Any]) -> Config:
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")

    config = Config()
    if "lang" in data:
        config.lang = Lang.parse(str(data["lang"]))
    for name in ("limit", "debounce_ms", "tick_ms"):
        if name in data:
            value = data[name]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
            setattr(config, name, value)
    if "timeout" in data:
        timeout = data["timeout"]
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
            raise ValueError(f"timeout must be a positive number, got {timeout!r}")
        config.timeout = float(timeout)
    return config


def load_config() -> Config:
    config_path = _get_config_path()
    if not config_path.exists():
        return Config()
    try:
        data = json.loads(config_path.read_text())
        return config_from_dict(data)
    except (OSError, ValueError) as e:
        print(f"Error reading config: {e}", file=sys.stderr)
        return Config()
