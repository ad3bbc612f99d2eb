"""Command-line tool that cuts new releases of a Go module.

Examples:
    # Release a new patch version (v1.0.0 -> v1.0.1).
    gorel release -t patch

    # Release a new minor version (v1.0.0 -> v1.1.0).
    gorel release -t minor

    # Release a new major version (v1.0.0 -> v2.0.0). This also rewrites the
    # module path in go.mod (example.com/mod -> example.com/mod/v2).
    gorel release -t major

    # Show what would happen without changing anything.
    gorel release -t patch --dry-run

    # Print the current version and the candidate next versions as JSON.
    gorel info
"""

# NOTE: The above docstring is used by clack for the command-line --help
#   message. This module is used to define clack configuration classes and the
#   clack parser function.
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Literal, Sequence

import clack
from typist import literal_to_list

from ._bump import BumpKind
from ._constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_MANIFEST_FILES,
    DEFAULT_REMOTE,
)


InfoCommand = Literal["info"]
ReleaseCommand = Literal["release"]
Command = Literal[InfoCommand, ReleaseCommand]  # available CLI sub-commands


class Config(clack.Config):
    """Base configuration class."""

    command: Command

    # --- OPTIONS
    remote: str = DEFAULT_REMOTE
    repo_dir: Path = Path(".")

    # --- CONFIG
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    manifest_files: List[str] = list(DEFAULT_MANIFEST_FILES)


class InfoConfig(Config):
    """Config for the 'info' subcommand."""

    command: InfoCommand


class ReleaseConfig(Config):
    """Config for the 'release' subcommand."""

    command: ReleaseCommand

    # --- OPTIONS
    bump_kind: BumpKind
    dry_run: bool = False


def clack_parser(argv: Sequence[str]) -> dict[str, Any]:
    """Parses gorel's command-line arguments."""
    parser = clack.Parser()
    parser.add_argument(
        "-C",
        "--repo-dir",
        type=Path,
        help=(
            "Path to the git checkout of the Go module we are releasing."
            " Defaults to the current directory."
        ),
    )
    parser.add_argument(
        "--remote",
        help=(
            "The git remote that commits and tags are pushed to. Defaults"
            f" to {DEFAULT_REMOTE!r}."
        ),
    )

    new_command = clack.new_command_factory(parser)

    ### setup the 'info' subcommand...
    new_command(
        "info",
        help=(
            "Print the current version and the next version for every bump"
            " type to standard output as JSON."
        ),
    )

    ### setup the 'release' subcommand...
    release_parser = new_command(
        "release",
        help=(
            "Bump the version, update go.mod on major bumps, then create and"
            " push the new version tag."
        ),
    )

    choices = literal_to_list(BumpKind)
    release_parser.add_argument(
        "-t",
        "--type",
        dest="bump_kind",
        metavar="TYPE",
        choices=choices,
        required=True,
        help=(
            "The part of the semantic version to bump forward. Choose from"
            f" one of {choices}."
        ),
    )
    release_parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Show what would be done without making any changes.",
    )

    args = parser.parse_args(argv[1:])
    kwargs = clack.filter_cli_args(args)

    return kwargs
