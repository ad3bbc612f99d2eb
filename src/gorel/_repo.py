"""Contains the Repository class, our handle on the git / go tooling."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional

from eris import ErisError, Err, Ok, Result
from logrus import Logger
import proctor
from typist import PathLike

from ._constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_MANIFEST_FILES,
    DEFAULT_REMOTE,
)


logger = Logger(__name__)


class Repository:
    """A Go module checkout which is managed by git.

    All commands are run from inside the checkout's directory, so nothing
    here depends on the current working directory of the process.
    """

    def __init__(
        self,
        path: PathLike = ".",
        *,
        remote: str = DEFAULT_REMOTE,
        manifest_files: Optional[Iterable[str]] = None,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
    ) -> None:
        self.path = Path(path)
        self.remote = remote
        self.manifest_files: List[str] = list(
            DEFAULT_MANIFEST_FILES
            if manifest_files is None
            else manifest_files
        )
        self.commit_message = commit_message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({str(self.path)!r},"
            f" remote={self.remote!r})"
        )

    def _run(self, cmd_list: List[str], step: str) -> Result[str, ErisError]:
        logger.debug("Running command: %s", " ".join(cmd_list), step=step)
        out_err_r = proctor.safe_popen(cmd_list, cwd=str(self.path))
        if isinstance(out_err_r, Err):
            err: Err[Any, ErisError] = Err(f"Failed to {step}.")
            return err.chain(out_err_r)

        out, _err = out_err_r.ok()
        return Ok(out)

    def list_tags(self) -> Result[List[str], ErisError]:
        """Returns all tags, sorted by descending version precedence."""
        out_r = self._run(
            ["git", "tag", "-l", "--sort=-version:refname"],
            "list already existing tags",
        )
        if isinstance(out_r, Err):
            return out_r

        return Ok([line for line in out_r.ok().split("\n") if line.strip()])

    def get_module_path(self) -> Result[str, ErisError]:
        """Returns the module path declared in go.mod."""
        out_r = self._run(["go", "list", "-m"], "get the module name")
        if isinstance(out_r, Err):
            return out_r

        return Ok(out_r.ok().strip())

    def set_module_path(self, module: str) -> Result[None, ErisError]:
        """Rewrites the module path in go.mod and tidies dependencies."""
        edit_r = self._run(
            ["go", "mod", "edit", f"-module={module}"], "update 'go.mod'"
        )
        if isinstance(edit_r, Err):
            return edit_r

        tidy_r = self._run(["go", "mod", "tidy"], "run 'go mod tidy'")
        if isinstance(tidy_r, Err):
            return tidy_r

        return Ok(None)

    def has_manifest_changes(self) -> bool:
        """Do the manifest files differ from what is committed?"""
        diff_r = proctor.safe_popen(
            ["git", "diff", "--quiet", *self.manifest_files],
            cwd=str(self.path),
        )
        return isinstance(diff_r, Err)

    def commit_manifest(self, version: str) -> Result[bool, ErisError]:
        """Commits and pushes manifest changes made for `version`.

        Returns:
            Ok(True) if a commit was pushed.
                OR
            Ok(False) if there was nothing to commit.
                OR
            Err(ErisError), if any git command failed.
        """
        manifest = "/".join(self.manifest_files)
        if not self.has_manifest_changes():
            logger.info("No %s changes to commit.", manifest)
            return Ok(False)

        add_r = self._run(
            ["git", "add", *self.manifest_files], f"add {manifest}"
        )
        if isinstance(add_r, Err):
            return add_r

        commit_r = self._run(
            [
                "git",
                "commit",
                "-m",
                self.commit_message.format(version=version),
            ],
            f"commit {manifest} changes",
        )
        if isinstance(commit_r, Err):
            return commit_r

        logger.info("Committed %s changes for %s.", manifest, version)

        push_r = self._run(
            ["git", "push", self.remote, "HEAD"], f"push {manifest} changes"
        )
        if isinstance(push_r, Err):
            return push_r

        logger.info("Pushed %s changes to %s.", manifest, self.remote)
        return Ok(True)

    def create_and_push_tag(self, tag: str) -> Result[None, ErisError]:
        """Creates the `tag` git tag and pushes it to the remote."""
        tag_r = self._run(["git", "tag", tag], "create tag")
        if isinstance(tag_r, Err):
            return tag_r

        logger.info("Created tag: %s", tag)

        push_r = self._run(["git", "push", self.remote, tag], "push tag")
        if isinstance(push_r, Err):
            return push_r

        logger.info("Pushed tag: %s", tag)
        return Ok(None)
