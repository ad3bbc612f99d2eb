"""This file contains shared fixtures and pytest hooks.

https://docs.pytest.org/en/6.2.x/fixture.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from eris import ErisError, Err, Ok, Result
import proctor
from pytest import MonkeyPatch, fixture


READ_ONLY_CMDS: List[Tuple[str, ...]] = [
    ("git", "tag", "-l"),
    ("git", "diff", "--quiet"),
    ("go", "list", "-m"),
]


class FakeTools:
    """Stands in for proctor.safe_popen() and records every command run."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.kwargs: List[Dict[str, Any]] = []
        self.tags: List[str] = []
        self.module = "example.com/mod"
        self.manifest_changed = True
        self.failures: Dict[Tuple[str, ...], str] = {}

    def __call__(
        self, cmd_parts: Iterable[str], **kwargs: Any
    ) -> Result[Tuple[str, str], ErisError]:
        cmd = list(cmd_parts)
        self.calls.append(cmd)
        self.kwargs.append(kwargs)

        for prefix, msg in self.failures.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                return Err(msg)

        if _startswith(cmd, ("git", "tag", "-l")):
            return Ok(("\n".join(self.tags) + "\n", ""))

        if _startswith(cmd, ("go", "list", "-m")):
            return Ok((self.module + "\n", ""))

        if _startswith(cmd, ("git", "diff", "--quiet")):
            if self.manifest_changed:
                return Err("exit status 1")
            return Ok(("", ""))

        return Ok(("", ""))

    @property
    def mutating_calls(self) -> List[List[str]]:
        """Commands which would have changed the repository or remote."""
        return [
            cmd
            for cmd in self.calls
            if not any(_startswith(cmd, ro) for ro in READ_ONLY_CMDS)
        ]


def _startswith(cmd: List[str], prefix: Tuple[str, ...]) -> bool:
    return tuple(cmd[: len(prefix)]) == prefix


@fixture(name="tools")
def tools_fixture(monkeypatch: MonkeyPatch) -> FakeTools:
    """Replaces the git / go subprocess calls with a recording fake."""
    result = FakeTools()
    monkeypatch.setattr(proctor, "safe_popen", result)
    return result
