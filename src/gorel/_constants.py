"""Contains constant variables."""

from __future__ import annotations

from typing import Final, List


PROJECT_NAME: Final = "gorel"

VERSION_PATTERN: Final = r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
MODULE_MAJOR_SUFFIX_PATTERN: Final = r"/v\d+$"

# Major versions at or above this threshold are encoded in the module path.
MIN_PATH_MAJOR: Final = 2

DEFAULT_REMOTE: Final = "origin"
DEFAULT_MANIFEST_FILES: Final[List[str]] = ["go.mod", "go.sum"]
DEFAULT_COMMIT_MESSAGE: Final = "chore: update module path for {version}"

DRY_RUN_PREFIX: Final = "DRY RUN MODE -"
