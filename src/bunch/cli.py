"""Bunch CLI — switch a tree to another branch's patch files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bunch import __version__
from bunch.config import DEFAULT_COMMIT_TITLE, SwitchConfig
from bunch.errors import BunchError
from bunch.models import ChangeType, FileChange
from bunch.pipeline import SwitchResult, run_switch

console = Console()
err_console = Console(stderr=True)

EPILOG = """\
\b
GIT_PATH       Directory with repository (parent directory for .git folder).
BRANCHES_RULE  Set of file suffixes separated with `_` showing what files
               should be affected and priority of application. If only the
               target branch is given, GIT_PATH/.bunch is checked for the
               rule.
COMMIT_TITLE   Title for the switch commit. "==== switch {target} ====" is
               used by default. {target} in the message is replaced with
               the target branch suffix.

\b
Example:
    bunch-restore ~/projects/kotlin 173_as31_as32
"""


def _setup_logging(level: int) -> None:
    """Send bunch log records to stderr."""
    logger = logging.getLogger("bunch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.setLevel(level)


def _print_changes(result: SwitchResult, repo_path: Path) -> None:
    if not result.changes:
        console.print(f"[yellow]Nothing to switch to '{escape(result.target)}'[/]")
        return

    table = Table(title=f"Switch {result.origin_suffix} -> {result.target}")
    table.add_column("Change", style="bold")
    table.add_column("File")

    style_map = {
        ChangeType.ADD: "green",
        ChangeType.MODIFY: "yellow",
        ChangeType.REMOVE: "red",
    }

    def sort_key(change: FileChange) -> tuple[str, str]:
        return str(change.path), change.kind.value

    for change in sorted(result.changes, key=sort_key):
        try:
            shown = change.path.relative_to(repo_path)
        except ValueError:
            shown = change.path
        style = style_map[change.kind]
        table.add_row(f"[{style}]{change.kind.value}[/]", escape(str(shown)))

    console.print(table)
    if result.commit:
        console.print(f"[green]Committed {result.commit[:10]}[/]")


@click.command(epilog=EPILOG)
@click.version_option(__version__, package_name="bunch-restore")
@click.argument("git_path", type=click.Path(path_type=Path))
@click.argument("branches_rule")
@click.argument("commit_title", required=False, default=DEFAULT_COMMIT_TITLE)
@click.option("--verbose", "-v", is_flag=True, help="Log every file operation.")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors.")
def main(git_path: Path, branches_rule: str, commit_title: str,
         verbose: bool, quiet: bool) -> None:
    """Restore the branch variant of a source tree from its patch files.

    Every file with a donor suffix from BRANCHES_RULE replaces its origin
    file, the previous origin content is kept as a patch for the origin
    branch, and all changes are committed as one commit.
    """
    if verbose:
        _setup_logging(logging.DEBUG)
    elif quiet:
        _setup_logging(logging.WARNING)
    else:
        _setup_logging(logging.INFO)

    config = SwitchConfig(
        repo_path=git_path,
        rule=branches_rule,
        commit_title=commit_title,
    )

    try:
        result = run_switch(config)
    except BunchError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]", soft_wrap=True)
        sys.exit(1)

    _print_changes(result, config.repo_path)
