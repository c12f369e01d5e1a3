"""Persisted application settings.

The configuration is a single JSON object stored under the per-user
application data directory (see :class:`barcode_tool.util.constants.Paths`).
It holds the saved rules, the last active rule text, the selected symbol
format, the always-on-top flag and the restored window size.

Loading never raises: a missing, unreadable or malformed file yields the
defaults together with an error message, and each missing field falls
back to its own default.  Saving reports failures as a ``(ok, message)``
tuple so callers decide whether to ignore them.
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from barcode_tool.util.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    Paths,
)


@dataclass
class AppConfig:
    """Settings written to ``config.json``."""

    saved_rules: list[str] = field(default_factory=list)
    last_used_rule: str = ""
    last_type_index: int = 0
    is_topmost: bool = True
    window_width: float = DEFAULT_WINDOW_WIDTH
    window_height: float = DEFAULT_WINDOW_HEIGHT

    def to_dict(self) -> dict[str, Any]:
        return {
            "savedRules": list(self.saved_rules),
            "lastUsedRule": self.last_used_rule,
            "lastTypeIndex": self.last_type_index,
            "isTopmost": self.is_topmost,
            "windowWidth": self.window_width,
            "windowHeight": self.window_height,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Build a config from a decoded JSON object.

        Unknown keys are ignored; missing or ill-typed keys take their
        default independently.
        """
        defaults = cls()
        return cls(
            saved_rules=_coerce_rules(data.get("savedRules")),
            last_used_rule=_coerce_str(data.get("lastUsedRule"), defaults.last_used_rule),
            last_type_index=_coerce_int(data.get("lastTypeIndex"), defaults.last_type_index),
            is_topmost=_coerce_bool(data.get("isTopmost"), defaults.is_topmost),
            window_width=_coerce_extent(data.get("windowWidth"), defaults.window_width),
            window_height=_coerce_extent(data.get("windowHeight"), defaults.window_height),
        )


# -----------------------------------------------------------------------------
# Field coercion
# -----------------------------------------------------------------------------


def _coerce_rules(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    rules: list[str] = []
    for item in value:
        if isinstance(item, str) and item and item not in rules:
            rules.append(item)
    return rules


def _coerce_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _coerce_int(value: Any, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def _coerce_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_extent(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return float(value)


# -----------------------------------------------------------------------------
# Load / save
# -----------------------------------------------------------------------------


def _config_path(path: str | os.PathLike[str] | None) -> Path:
    return Path(path) if path is not None else Path(Paths.CONFIG_FILE)


def load_app_config(
    path: str | os.PathLike[str] | None = None,
) -> tuple[AppConfig, str | None]:
    """
    Load the application config from disk.

    Returns
    -------
    tuple[AppConfig, str | None]
        - config: the loaded config, or defaults when the file is absent
          or unusable.
        - error: None on success or when no file exists yet, otherwise a
          human-readable reason the defaults were used.
    """
    config_path = _config_path(path)
    if not config_path.exists():
        logging.debug("Config file %s does not exist; using defaults", config_path)
        return AppConfig(), None
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logging.warning("Failed to read config file %s: %s", config_path, exc)
        return AppConfig(), f"Failed to read config file {config_path}: {exc}"

    if not data:
        logging.warning("Config file %s is empty; using defaults", config_path)
        return AppConfig(), f"Config file {config_path} is empty"
    if not isinstance(data, Mapping):
        logging.warning(
            "Config file %s must contain an object, got %s; using defaults",
            config_path,
            type(data).__name__,
        )
        return AppConfig(), f"Config file {config_path} must contain an object"
    return AppConfig.from_dict(data), None


def save_app_config(
    config: AppConfig,
    path: str | os.PathLike[str] | None = None,
) -> tuple[bool, str]:
    """
    Persist *config* as JSON, creating the parent directory when needed.

    Returns
    -------
    tuple[bool, str]
        - success: True when the file was written.
        - message: the written path, or the failure reason.
    """
    config_path = _config_path(path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            json.dumps(config.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    except OSError as exc:
        logging.warning("Failed to write config file %s: %s", config_path, exc)
        return False, f"Failed to write config file {config_path}: {exc}"
    logging.debug("Config saved to %s", config_path)
    return True, str(config_path)


__all__ = ["AppConfig", "load_app_config", "save_app_config"]
