"""
Command line interface for the unified_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``unified-changelog`` command. It locates the
repository, loads the configuration, gathers the versioned history of
every configured branch and writes the rendered changelog. The command
runs once and exits; with no options it uses the configuration file or
the built-in defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from unified_changelog import __version__
from unified_changelog.config.loader import ChangelogConfig, ConfigError, load_config
from unified_changelog.pipeline import run
from unified_changelog.vcs.git_client import GitClient

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_error(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def apply_overrides(
    config: ChangelogConfig,
    branches: Tuple[str, ...],
    days: Optional[int],
    output: Optional[Path],
    checkout: bool,
) -> ChangelogConfig:
    """Apply command line overrides on top of the loaded configuration."""
    if branches:
        config.branches = list(branches)
    if days is not None:
        config.window_days = days
    if output is not None:
        # relative to the invoking directory, not the repository root
        config.output_path = output.resolve()
    if checkout:
        config.checkout_branches = True
    return config


@click.command()
@click.option(
    "--repo",
    "repo",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Start searching for the Git repository here (defaults to the current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a JSON configuration file.",
)
@click.option("--branch", "branches", multiple=True, help="Branch to include (repeatable).")
@click.option("--days", type=click.IntRange(min=0), default=None, help="Number of trailing days to include.")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination of the changelog file.",
)
@click.option("--checkout", is_flag=True, help="Check out each branch while reading its history.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="unified-changelog")
def main(
    repo: Optional[Path],
    config_path: Optional[Path],
    branches: Tuple[str, ...],
    days: Optional[int],
    output: Optional[Path],
    checkout: bool,
    verbose: bool,
) -> None:
    """Merge the recent history of several release branches into one changelog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    total_steps = 3

    try:
        # Step 1: Detect repository
        print_step(1, total_steps, "Detecting Repository")
        repo_root = GitClient.find_repo_root(repo or Path.cwd())
        if repo_root is None:
            print_error("No Git repository found in current directory or parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        print_success(f"Found Git repository at: {repo_root}")

        # Step 2: Load configuration
        print_step(2, total_steps, "Loading Configuration")
        try:
            config = load_config(repo_root, config_path)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        config = apply_overrides(config, branches, days, output, checkout)
        print_success("Configuration loaded successfully")
        print_info(f"Branches: {', '.join(config.branches)}", indent=1)
        print_info(f"Window: last {config.window_days} day(s)", indent=1)

        # Step 3: Gather history, render and write
        print_step(3, total_steps, "Generating Changelog")
        output_path = run(config, GitClient(repo_root))
        print_success(f"Unified changelog generated at {output_path}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logging.exception("Error generating unified changelog: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
