"""
Command line interface for the changelog_helper tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changelog-gen`` command. It orchestrates
configuration loading, fetching merged pull requests, filtering and
classification, and writing the Markdown changelog. Exit codes are
listed below.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from changelog_helper import __version__
from changelog_helper.config.loader import ConfigError, load_config, validate_config
from changelog_helper.github.client import GitHubClient, SourceUnavailableError
from changelog_helper.grouping.group_model import Category, ChangelogDigest
from changelog_helper.grouping.grouper import build_digest
from changelog_helper.report.markdown import render_markdown
from changelog_helper.report.writer import ReportWriteError, write_report

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_CONFIG_ERROR = 3
EXIT_SOURCE_UNAVAILABLE = 4
EXIT_OUTPUT_FAILURE = 5

TOTAL_STEPS = 4
REPORT_FRAME = "=" * 60


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Print a message before a slow operation and its duration after."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            click.echo(f"  ✓ Done ({time.time() - self.start_time:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_repo(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split ``OWNER/NAME`` into its two parts. Used as an option callback.

    Raises
    ------
    click.BadParameter
        If ``value`` is not of the form ``OWNER/NAME``.
    """
    if value is None:
        return None
    owner, sep, name = value.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise click.BadParameter(f"expected OWNER/NAME, got {value!r}")
    return owner, name


def compute_window(days: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return ``(start, end)`` for the last ``days`` days ending at ``now``."""
    end = now if now is not None else _utcnow()
    return end - timedelta(days=days), end


def merge_options(config: Dict[str, Any], **overrides: Any) -> Dict[str, Any]:
    """Return ``config`` updated with the command line values that were given."""
    merged = dict(config)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return validate_config(merged)


def print_digest_summary(digest: ChangelogDigest, days: int) -> None:
    """Print the counts collected while building the changelog."""
    print_info(f"Found {digest.total} merged PRs in the last {days} days")
    print_info(f"Filtered to {digest.user_facing} user-facing changes")
    print_info(
        f"Categorized: {digest.count(Category.NEW_FEATURE)} features, "
        f"{digest.count(Category.IMPROVEMENT)} improvements, "
        f"{digest.count(Category.BUG_FIX)} fixes"
    )


@click.command()
@click.option("--repo", "repo", metavar="OWNER/NAME", callback=parse_repo, help="GitHub repository to summarise.")
@click.option("--days", type=click.IntRange(min=1), help="Number of days to look back.")
@click.option("--output", "output_path", type=click.Path(dir_okay=False), help="File to write the changelog to.")
@click.option("--project-name", help="Project name used in the changelog title.")
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token (defaults to $GITHUB_TOKEN).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read settings from this JSON file instead of ~/.changelog_helper/config.json.",
)
@click.option("--quiet", is_flag=True, help="Do not print the changelog after writing it.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog-gen")
def main(
    repo: Optional[Tuple[str, str]],
    days: Optional[int],
    output_path: Optional[str],
    project_name: Optional[str],
    token: Optional[str],
    config_path: Optional[Path],
    quiet: bool,
    verbose: bool,
) -> None:
    """📝 Generate a user-facing changelog from recently merged pull requests.

    Internal changes are filtered out, the rest are sorted into new
    features, improvements and bug fixes, and their titles are rewritten
    into plain language.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)
    owner, name = repo or (None, None)
    current_step = 0

    try:
        # Step 1: Load configuration
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Loading Configuration")

        try:
            config = merge_options(
                load_config(config_path),
                repo_owner=owner,
                repo_name=name,
                days=days,
                output_path=output_path,
                project_name=project_name,
                token=token,
            )
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        print_success("Configuration loaded successfully")
        print_info(f"Repository: {config['repo_owner']}/{config['repo_name']}", indent=1)
        print_info(f"Window: last {config['days']} days", indent=1)
        if not config["token"]:
            print_info("No GitHub token set; using unauthenticated requests", indent=1)

        # Step 2: Fetch merged pull requests
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Fetching Merged Pull Requests")

        start, end = compute_window(config["days"])
        client = GitHubClient(
            owner=config["repo_owner"],
            repo=config["repo_name"],
            token=config["token"],
            per_page=config["per_page"],
            request_timeout=float(config["request_timeout"]),
        )
        try:
            with ProgressIndicator(f"Fetching merged PRs from {client.full_name}"):
                changes = client.fetch_merged(start)
        except SourceUnavailableError as exc:
            print_error(f"Error generating changelog: {exc}")
            raise click.exceptions.Exit(EXIT_SOURCE_UNAVAILABLE)

        # Step 3: Filter and classify
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Classifying Changes")

        digest = build_digest(changes)
        print_digest_summary(digest, config["days"])
        if digest.is_empty:
            print_warning("No user-facing changes in this period.")

        # Step 4: Render and write
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Writing Changelog")

        changelog = render_markdown(
            digest.groups,
            start,
            end,
            project_name=config["project_name"],
            generated_on=end,
        )
        try:
            written = write_report(config["output_path"], changelog)
        except ReportWriteError as exc:
            print_error(f"Output error: {exc}")
            raise click.exceptions.Exit(EXIT_OUTPUT_FAILURE)
        print_success(f"Written to {written}")

        if not quiet:
            click.echo(f"\n{REPORT_FRAME}")
            click.echo(changelog)
            click.echo(REPORT_FRAME)

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
