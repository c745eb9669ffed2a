"""Git object-store capability used by Change-Id generation and merge detection.

The pipeline never shells out directly. Everything it needs from Git goes
through the small :class:`ObjectStore` interface, so tests can swap in an
in-memory fake and the fallback paths reduce to "no store available".
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

import git
from git.exc import InvalidGitRepositoryError, NoSuchPathError

logger = logging.getLogger(__name__)


class ObjectStoreError(Exception):
    """Raised when a Git primitive fails."""


class ObjectStore(Protocol):
    """Version-control primitives consumed by the core pipeline."""

    def write_tree(self) -> str:
        """Write the current index as a tree object and return its hash."""
        ...

    def resolve(self, rev: str) -> Optional[str]:
        """Resolve ``rev`` to an object hash, or None when it does not exist."""
        ...

    def parents_of(self, rev: str) -> list[str]:
        """Return the parent hashes of ``rev``."""
        ...

    def tree_of(self, rev: str) -> Optional[str]:
        """Return the tree hash of ``rev``, or None when it does not exist."""
        ...

    def author_ident(self) -> str:
        """Return ``Name <email> <epoch> <tz>`` for the pending author."""
        ...

    def committer_ident(self) -> str:
        """Return ``Name <email> <epoch> <tz>`` for the pending committer."""
        ...

    def hash_commit_object(self, blob: str) -> str:
        """Hash ``blob`` as a commit object without writing it."""
        ...


class GitObjectStore:
    """ObjectStore backed by a real repository through GitPython."""

    def __init__(self, repo: git.Repo) -> None:
        self.repo = repo

    def _run(self, *args: str, **kwargs) -> str:
        try:
            return self.repo.git.execute(["git", *args], **kwargs).strip()
        except git.GitCommandError as e:
            raise ObjectStoreError(f"git {' '.join(args)} failed: {e.stderr.strip()}") from e

    def write_tree(self) -> str:
        return self._run("write-tree")

    def resolve(self, rev: str) -> Optional[str]:
        try:
            return self._run("rev-parse", "--verify", "--quiet", rev)
        except ObjectStoreError:
            return None

    def parents_of(self, rev: str) -> list[str]:
        # rev^@ expands to all parents, one per line
        output = self._run("rev-parse", f"{rev}^@")
        return [line for line in output.splitlines() if line.strip()]

    def tree_of(self, rev: str) -> Optional[str]:
        return self.resolve(f"{rev}^{{tree}}")

    def author_ident(self) -> str:
        return self._run("var", "GIT_AUTHOR_IDENT")

    def committer_ident(self) -> str:
        return self._run("var", "GIT_COMMITTER_IDENT")

    def hash_commit_object(self, blob: str) -> str:
        # GitPython has no string stdin, so feed hash-object through a temp file
        with tempfile.TemporaryFile() as fh:
            fh.write(blob.encode("utf-8", errors="surrogateescape"))
            fh.seek(0)
            return self._run("hash-object", "-t", "commit", "--stdin", istream=fh)


def open_object_store(path: Union[str, Path, None] = None) -> Optional[GitObjectStore]:
    """Open the repository containing ``path``.

    Args:
        path: Any directory inside the work tree. Defaults to the current directory.

    Returns:
        A GitObjectStore, or None when ``path`` is not inside a Git repository.
    """
    try:
        repo = git.Repo(path or Path.cwd(), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        logger.debug(f"No Git repository available at {path or Path.cwd()}: {e}")
        return None
    return GitObjectStore(repo)
