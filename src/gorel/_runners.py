"""Contains the clack runner functions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from clack import ConfigFile
from eris import ErisError, Err
from logrus import Logger
from typist import literal_to_list

from ._bump import (
    BumpKind,
    Version,
    bump_version,
    derive_module_path,
    needs_module_update,
    resolve_current_version,
)
from ._config import Config, InfoConfig, ReleaseConfig
from ._constants import DRY_RUN_PREFIX
from ._repo import Repository


logger = Logger(__name__)


def run_release(cfg: ReleaseConfig) -> int:
    """Clack runner for the 'release' subcommand."""
    repo = _make_repo(cfg)
    if cfg.dry_run:
        print(f"{DRY_RUN_PREFIX} No changes will be made")

    tags_r = repo.list_tags()
    if isinstance(tags_r, Err):
        return _fail(
            "Could not retrieve the current version.", tags_r.err(), repo
        )

    current_version = resolve_current_version(tags_r.ok())
    print(f"Current version: {current_version}")

    new_version = bump_version(current_version, cfg.bump_kind)
    print(f"New version: {new_version}")

    update_module = needs_module_update(current_version, cfg.bump_kind)
    if update_module:
        print("Major version bump detected - 'go.mod' needs update")
        ec = _release_module_path(cfg, repo, new_version)
        if ec != 0:
            return ec

    if cfg.dry_run:
        print(f"{DRY_RUN_PREFIX} Would create and push tag: {new_version}")
        print(f"{DRY_RUN_PREFIX} Complete! Would release {new_version}")
        return 0

    tag_r = repo.create_and_push_tag(str(new_version))
    if isinstance(tag_r, Err):
        return _fail("Failed to push tag.", tag_r.err(), repo)

    if update_module:
        print("Module path updated for major version bump")

    print(f"Released {new_version}")
    return 0


def run_info(cfg: InfoConfig) -> int:
    """Clack runner for the 'info' subcommand."""
    repo = _make_repo(cfg)

    tags_r = repo.list_tags()
    if isinstance(tags_r, Err):
        return _fail(
            "Could not retrieve the current version.", tags_r.err(), repo
        )

    tags = tags_r.ok()
    current_version = resolve_current_version(tags)

    data: Dict[str, Any] = {}
    data["current_version"] = str(current_version)
    data["next_versions"] = {
        kind: str(bump_version(current_version, kind))
        for kind in literal_to_list(BumpKind)
    }
    data["tag_count"] = len(tags)
    data["config"] = {
        k: str(v) if isinstance(v, (ConfigFile, Path)) else v
        for (k, v) in cfg.dict().items()
    }

    print(json.dumps(data, sort_keys=True))
    return 0


def _release_module_path(
    cfg: ReleaseConfig, repo: Repository, new_version: Version
) -> int:
    module_r = repo.get_module_path()
    if isinstance(module_r, Err):
        return _fail("Failed to update 'go.mod'.", module_r.err(), repo)

    current_module = module_r.ok()
    new_module = derive_module_path(current_module, new_version.major)
    print(f"Updating module path: {current_module} -> {new_module}")

    if cfg.dry_run:
        print(f"{DRY_RUN_PREFIX} Would update module path to {new_module}")
        print(
            f"{DRY_RUN_PREFIX} Would commit and push go.mod changes for"
            f" {new_version}"
        )
        return 0

    set_r = repo.set_module_path(new_module)
    if isinstance(set_r, Err):
        return _fail("Failed to update 'go.mod'.", set_r.err(), repo)

    commit_r = repo.commit_manifest(str(new_version))
    if isinstance(commit_r, Err):
        return _fail(
            "Failed to commit or push go.mod changes.", commit_r.err(), repo
        )

    return 0


def _make_repo(cfg: Config) -> Repository:
    return Repository(
        cfg.repo_dir,
        remote=cfg.remote,
        manifest_files=cfg.manifest_files,
        commit_message=cfg.commit_message,
    )


def _fail(msg: str, e: ErisError, repo: Repository) -> int:
    logger.error(msg, repo_dir=str(repo.path), error=e.to_json())
    return 1
