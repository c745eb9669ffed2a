"""Shared fixtures for commit-msg tests."""

import hashlib
import shutil
import tempfile
from pathlib import Path

import git
import pytest

from commit_msg.core.object_store import ObjectStoreError

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
AUTHOR = "Test User <test@example.com> 1700000000 +0000"


class FakeObjectStore:
    """In-memory ObjectStore hashing commit blobs the way Git does."""

    def __init__(
        self,
        tree: str = EMPTY_TREE,
        head: str = None,
        parents: list = None,
        head_tree: str = None,
        author: str = AUTHOR,
        committer: str = AUTHOR,
        failing: tuple = (),
    ):
        self.tree = tree
        self.head = head
        self.parents = parents or []
        self.head_tree = head_tree
        self.author = author
        self.committer = committer
        self.failing = set(failing)
        self.hashed_blobs = []

    def _check(self, name):
        if name in self.failing:
            raise ObjectStoreError(f"{name} failed")

    def write_tree(self):
        self._check("write_tree")
        return self.tree

    def resolve(self, rev):
        self._check("resolve")
        return self.head if rev == "HEAD^0" else None

    def parents_of(self, rev):
        self._check("parents_of")
        return list(self.parents)

    def tree_of(self, rev):
        self._check("tree_of")
        return self.head_tree

    def author_ident(self):
        self._check("author_ident")
        return self.author

    def committer_ident(self):
        self._check("committer_ident")
        return self.committer

    def hash_commit_object(self, blob):
        self._check("hash_commit_object")
        self.hashed_blobs.append(blob)
        data = blob.encode("utf-8", errors="surrogateescape")
        return hashlib.sha1(b"commit %d\0" % len(data) + data).hexdigest()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_store():
    """ObjectStore double for a repository whose HEAD has one parent."""
    return FakeObjectStore(head="a" * 40, parents=["b" * 40], head_tree="c" * 40)


@pytest.fixture
def git_repo(temp_dir, monkeypatch):
    """Initialise a repository with one commit and a fixed identity/date."""
    if shutil.which("git") is None:
        pytest.skip("git binary not available")

    # Pin identities and dates so GIT_*_IDENT is stable across calls
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_AUTHOR_DATE", "1700000000 +0000")
    monkeypatch.setenv("GIT_COMMITTER_DATE", "1700000000 +0000")

    repo = git.Repo.init(temp_dir / "repo")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    readme = Path(repo.working_tree_dir) / "README.md"
    readme.write_text("initial\n")
    repo.git.add("README.md")
    repo.git.commit("-m", "Initial commit", "--no-verify")
    return repo
