"""Installation of the commit-msg hook script into a repository."""

import logging
import os
import stat
from pathlib import Path
from typing import Union

import git
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from .config import GitConfigReader

logger = logging.getLogger(__name__)

HOOK_NAME = "commit-msg"

HOOK_SCRIPT = """#!/bin/sh
# Installed by commit-msg: adds Change-Id and Co-developed-by trailers.
if command -v commit-msg >/dev/null 2>&1; then
    exec commit-msg exec "$1"
fi
echo "commit-msg: command not found, skipping hook" >&2
exit 0
"""


class InstallError(Exception):
    """Raised when the hook cannot be installed."""


def resolve_hooks_dir(repo: git.Repo) -> Path:
    """Find the directory Git runs hooks from.

    Honours ``core.hooksPath``. Husky points that setting at ``.husky/_``,
    whose wrappers call the real hooks in ``.husky``, so the trailing ``_``
    is dropped. Relative paths are resolved against the work tree root.
    """
    hooks_path = GitConfigReader(repo.working_tree_dir or repo.git_dir)("core.hookspath")

    if not hooks_path:
        return Path(repo.git_dir) / "hooks"

    hooks_dir = Path(os.path.expanduser(hooks_path))
    if hooks_dir.name == "_" and hooks_dir.parent.name == ".husky":
        hooks_dir = hooks_dir.parent

    if not hooks_dir.is_absolute():
        base = Path(repo.working_tree_dir) if repo.working_tree_dir else Path(repo.git_dir)
        hooks_dir = base / hooks_dir
    return hooks_dir


def install_hook(path: Union[str, Path, None] = None) -> Path:
    """Install the commit-msg hook into the repository containing ``path``.

    An existing hook is overwritten, which is also how upgrades happen.

    Args:
        path: Any directory inside the work tree. Defaults to the current directory.

    Returns:
        Path of the written hook script.

    Raises:
        InstallError: If ``path`` is not inside a Git repository or the hook
                      cannot be written.
    """
    try:
        repo = git.Repo(path or Path.cwd(), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise InstallError("Not in a Git repository") from e

    hooks_dir = resolve_hooks_dir(repo)
    hook_path = hooks_dir / HOOK_NAME

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(HOOK_SCRIPT, encoding="utf-8")
        mode = hook_path.stat().st_mode
        hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise InstallError(f"Could not write hook to {hook_path}: {e}") from e

    logger.info(f"Hook installed at: {hook_path}")
    return hook_path
