"""
Configuration loader for unified_changelog.

The tool reads an optional JSON file named ``.unified_changelog.json``
from the repository root. Every key is optional; missing keys fall back
to the defaults of :class:`ChangelogConfig`::

    {
        "branches": ["prod", "uat"],
        "output_path": "UNIFIED_CHANGELOG.md",
        "window_days": 30,
        "title": "Unified Changelog",
        "checkout_branches": false
    }

If the file is malformed, contains unknown keys, or has values of the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = ".unified_changelog.json"


class ConfigError(Exception):
    """Raised when the changelog configuration file is missing or invalid."""

    pass


@dataclass
class ChangelogConfig:
    """Settings for a single changelog run.

    Attributes
    ----------
    branches : List[str]
        Branches to include, in the order they are processed.
    output_path : Path
        Destination of the rendered document. Relative paths are resolved
        against the repository root.
    window_days : int
        Only commits from the last ``window_days`` days are included.
    title : str
        Level-1 heading of the document.
    checkout_branches : bool
        Check out each branch while reading it instead of naming the
        branch in every query.
    """

    branches: List[str] = field(default_factory=lambda: ["prod", "uat"])
    output_path: Path = Path("UNIFIED_CHANGELOG.md")
    window_days: int = 30
    title: str = "Unified Changelog"
    checkout_branches: bool = False

    def resolve_output_path(self, repo_root: Path) -> Path:
        if self.output_path.is_absolute():
            return self.output_path
        return repo_root / self.output_path


def _validate(data: Dict[str, Any]) -> None:
    known = {f.name for f in fields(ChangelogConfig)}
    unknown = sorted(key for key in data if key not in known)
    if unknown:
        logger.error("Configuration file contains unknown keys: %s", unknown)
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    if "branches" in data:
        branches = data["branches"]
        if not isinstance(branches, list) or not all(
            isinstance(b, str) and b.strip() for b in branches
        ):
            raise ConfigError("'branches' must be a list of non-empty strings")
        if not branches:
            raise ConfigError("'branches' must not be empty")
    if "output_path" in data and not isinstance(data["output_path"], str):
        raise ConfigError("'output_path' must be a string")
    if "window_days" in data:
        window = data["window_days"]
        # bool is a subclass of int
        if isinstance(window, bool) or not isinstance(window, int) or window < 0:
            raise ConfigError("'window_days' must be a non-negative integer")
    if "title" in data and not isinstance(data["title"], str):
        raise ConfigError("'title' must be a string")
    if "checkout_branches" in data and not isinstance(data["checkout_branches"], bool):
        raise ConfigError("'checkout_branches' must be a boolean")


def load_config(repo_root: Path, config_path: Optional[Path] = None) -> ChangelogConfig:
    """Load the changelog configuration and return it.

    Args:
        repo_root: Repository root searched for ``.unified_changelog.json``.
        config_path: Explicit configuration file. Unlike the default file,
                     it must exist.

    Returns:
        The validated :class:`ChangelogConfig`. The defaults are returned
        when no explicit path is given and the default file does not exist.

    Raises:
        ConfigError: If the configuration file is missing (explicit path
                     only), malformed, or invalid.
    """
    explicit = config_path is not None
    path = config_path if explicit else repo_root / CONFIG_FILE_NAME

    if not path.exists():
        if explicit:
            logger.error("Configuration file '%s' does not exist", path)
            raise ConfigError(f"Missing configuration file: {path}")
        logger.debug("No configuration file at %s; using defaults", path)
        return ChangelogConfig()

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")
    _validate(data)

    config = ChangelogConfig()
    if "branches" in data:
        config.branches = [b.strip() for b in data["branches"]]
    if "output_path" in data:
        config.output_path = Path(data["output_path"])
    if "window_days" in data:
        config.window_days = data["window_days"]
    if "title" in data:
        config.title = data["title"]
    if "checkout_branches" in data:
        config.checkout_branches = data["checkout_branches"]

    logger.debug("Loaded changelog configuration from: %s", path)
    logger.debug("Configuration data: %s", config)
    return config
