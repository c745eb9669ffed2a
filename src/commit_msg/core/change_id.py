"""Change-Id generation.

The primary path hashes a commit-object-shaped blob with ``git hash-object``,
which is how Gerrit's own hook derives Change-Ids: the value depends only on
the staged tree, the parent, both identities and the message. When no object
store is available a local FNV-1a hash is used instead.
"""

import logging
import re
import time
from typing import Optional

from .object_store import ObjectStore, ObjectStoreError

logger = logging.getLogger(__name__)

CHANGE_ID_RE = re.compile(r"^Change-Id: I[a-f0-9]+\s*$")

UNKNOWN_IDENT = "Unknown <unknown@example.com>"

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
FALLBACK_HEX_LENGTH = 32


def has_change_id(message: str) -> bool:
    """Check whether any line of ``message`` is a well-formed Change-Id trailer."""
    return any(CHANGE_ID_RE.match(line) for line in message.split("\n"))


def _ident_or_unknown(getter) -> str:
    try:
        return getter() or UNKNOWN_IDENT
    except ObjectStoreError as e:
        logger.debug(f"Identity unavailable, using placeholder: {e}")
        return UNKNOWN_IDENT


def build_change_id_input(message: str, store: ObjectStore) -> str:
    """Build the commit-object-shaped blob that the Change-Id is hashed from.

    Args:
        message: Cleaned commit message.
        store: Object store to read the tree, parent and identities from.

    Returns:
        ``tree``/``parent``/``author``/``committer`` header lines, a blank
        line, then the message. ``parent`` is omitted for a root commit.

    Raises:
        ObjectStoreError: If the index cannot be written as a tree.
    """
    tree = store.write_tree()
    parent = store.resolve("HEAD^0")
    author = _ident_or_unknown(store.author_ident)
    committer = _ident_or_unknown(store.committer_ident)

    header = [f"tree {tree}"]
    if parent:
        header.append(f"parent {parent}")
    header.append(f"author {author}")
    header.append(f"committer {committer}")
    return "\n".join(header) + "\n\n" + message


def fallback_change_id(message: str, now_ms: Optional[int] = None) -> str:
    """Compute a Change-Id without Git.

    Runs 32-bit FNV-1a over ``message``, the current epoch in milliseconds
    and a newline, then left-pads the hex digest to 32 characters. The result
    is not content addressed; it only guarantees the hook never fails on
    identifier generation.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    value = FNV_OFFSET_BASIS
    for ch in f"{message}\n{now_ms}\n":
        value ^= ord(ch)
        value = (value * FNV_PRIME) & 0xFFFFFFFF

    digest = format(value, "x").rjust(FALLBACK_HEX_LENGTH, "0")[:FALLBACK_HEX_LENGTH]
    return f"I{digest}"


def generate_change_id(message: str, store: Optional[ObjectStore] = None) -> str:
    """Generate a Change-Id for ``message``.

    Args:
        message: Cleaned commit message.
        store: Object store for the content-addressed path. None selects the
               fallback hash directly.

    Returns:
        ``"I"`` followed by a lowercase hex digest.
    """
    if store is not None:
        try:
            digest = store.hash_commit_object(build_change_id_input(message, store))
            if digest:
                return f"I{digest.lower()}"
            logger.warning("git hash-object returned no hash, using fallback Change-Id")
        except ObjectStoreError as e:
            logger.warning(f"Could not use git hash-object, using fallback Change-Id: {e}")
    else:
        logger.debug("No object store available, using fallback Change-Id")

    return fallback_change_id(message)
