"""Logic for resolving and bumping the project version on new releases."""

from __future__ import annotations

import re
from typing import Iterable, Literal, Type, TypeVar

from eris import ErisError, Err, Ok, Result
from pydantic import NonNegativeInt
from pydantic.dataclasses import dataclass

from ._constants import (
    MIN_PATH_MAJOR,
    MODULE_MAJOR_SUFFIX_PATTERN,
    VERSION_PATTERN,
)


BumpKind = Literal["major", "minor", "patch"]

Version_T = TypeVar("Version_T", bound="Version")


@dataclass(frozen=True, order=True)
class Version:
    """A (major, minor, patch) semantic version triple."""

    major: NonNegativeInt = 0
    minor: NonNegativeInt = 0
    patch: NonNegativeInt = 0

    @classmethod
    def from_string(
        cls: Type["Version_T"], tag: str
    ) -> Result["Version_T", ErisError]:
        """Parses the leading vX.Y.Z of a tag (any suffix is ignored)."""
        if m := re.match(VERSION_PATTERN, tag):
            return Ok(
                cls(
                    int(m.group("major")),
                    int(m.group("minor")),
                    int(m.group("patch")),
                )
            )
        else:
            return Err(
                "This tag is not a valid version tag.\n\nPATTERN:"
                f" {VERSION_PATTERN!r}\nTAG: {tag!r}"
            )

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"


def resolve_current_version(tags: Iterable[str]) -> Version:
    """Returns the version of the first valid tag found in `tags`.

    Arguments:
        @tags: Tag names, ordered by descending version precedence (the way
            `git tag -l --sort=-version:refname` lists them).

    Returns:
        The version parsed from the first tag that looks like vX.Y.Z, or
        v0.0.0 if no such tag exists (i.e. nothing has been released yet).
    """
    for tag in tags:
        tag = tag.strip()
        if not tag:
            continue

        version_r = Version.from_string(tag)
        if isinstance(version_r, Ok):
            return version_r.ok()

    return Version(0, 0, 0)


def bump_version(version: Version, kind: BumpKind) -> Version:
    """Returns the version that follows `version` for a `kind` bump."""
    if kind == "major":
        return Version(version.major + 1, 0, 0)
    elif kind == "minor":
        return Version(version.major, version.minor + 1, 0)
    else:
        return Version(version.major, version.minor, version.patch + 1)


def needs_module_update(current: Version, kind: BumpKind) -> bool:
    """Should the module path in go.mod be rewritten for this release?"""
    return kind == "major" and current.major >= 0


def derive_module_path(module: str, new_major: int) -> str:
    """Returns `module` re-suffixed for the `new_major` major version.

    Any existing /vN suffix is dropped first. Major versions 0 and 1 use the
    bare module path, later ones get a /vN suffix.
    """
    base_module = re.sub(MODULE_MAJOR_SUFFIX_PATTERN, "", module)
    if new_major >= MIN_PATH_MAJOR:
        return f"{base_module}/v{new_major}"
    else:
        return base_module
