#!/usr/bin/env python
"""
Thin wrapper script to invoke the unified_changelog CLI.

Running ``python unifiedchangelog.py`` is equivalent to running the
``unified-changelog`` console script installed via ``pyproject.toml``.
"""

from unified_changelog.cli import main


if __name__ == "__main__":
    main(prog_name="unified-changelog")
