"""
Configuration loading for unified_changelog.

Provides a loader for the optional ``.unified_changelog.json`` file in
the repository root. See :mod:`unified_changelog.config.loader` for
implementation details.
"""

from .loader import ChangelogConfig, ConfigError, load_config  # noqa: F401
