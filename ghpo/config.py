from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .layout import BRANCH_MAX_WIDTH, TITLE_MAX_WIDTH

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "gh-po"
CONFIG_PATH = CONFIG_DIR / "config.json"
LOG_LEVEL_ENV = "GH_PO_LOG_LEVEL"


@dataclass(frozen=True)
class AppConfig:
    gh_path: str = "gh"
    title_max_width: int = TITLE_MAX_WIDTH
    branch_max_width: int = BRANCH_MAX_WIDTH
    log_level: str = "WARNING"

    @staticmethod
    def from_dict(data: dict[str, Any]) -> AppConfig:
        """Create an `AppConfig` instance from a plain dictionary.

        Args:
            data: A mapping parsed from JSON containing optional keys
                `gh_path` (str), `title_max_width` (int), `branch_max_width`
                (int) and `log_level` (str).

        Returns:
            A populated `AppConfig` object; missing keys keep their defaults.

        Raises:
            ValueError: If a column width is not a positive integer.
        """
        defaults = AppConfig()
        return AppConfig(
            gh_path=str(data.get("gh_path") or defaults.gh_path),
            title_max_width=_positive_int(data, "title_max_width", defaults.title_max_width),
            branch_max_width=_positive_int(data, "branch_max_width", defaults.branch_max_width),
            log_level=str(data.get("log_level") or defaults.log_level).upper(),
        )


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{key} must be a positive integer, got {value!r}")
    return value


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from `path` (default `CONFIG_PATH`).

    A missing file yields the defaults; nothing is written to disk. The
    `GH_PO_LOG_LEVEL` environment variable overrides `log_level`.

    Args:
        path: Location of the JSON config file.

    Returns:
        The loaded `AppConfig` instance.

    Raises:
        OSError: If reading the file fails.
        json.JSONDecodeError: If the file exists but contains invalid JSON.
        ValueError: If a setting has an invalid value.
    """
    path = path or CONFIG_PATH
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            data = {}
    else:
        data = {}
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        data["log_level"] = env_level
    return AppConfig.from_dict(data)
