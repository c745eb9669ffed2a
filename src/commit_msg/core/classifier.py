"""Commit classification: merge commits and temporary (fixup!/squash!) commits."""

import logging
from pathlib import Path
from typing import Optional, Union

from .object_store import ObjectStore, ObjectStoreError

logger = logging.getLogger(__name__)

MERGE_MESSAGE_FILE = "MERGE_MSG"
TEMPORARY_PREFIXES = ("fixup!", "squash!")


def _first_line(message: str) -> str:
    return message.split("\n", 1)[0].strip()


def is_temporary_commit(message: str) -> bool:
    """Determine if a message belongs to a commit destined for autosquash.

    Examples:
        >>> is_temporary_commit("fixup! feat: add parser")
        True
        >>> is_temporary_commit("feat: add parser")
        False
    """
    return _first_line(message).startswith(TEMPORARY_PREFIXES)


def has_merge_parents(store: ObjectStore) -> bool:
    """Check whether HEAD is a merge being amended without further changes.

    The index must still match HEAD's tree and HEAD must have two or more
    parents. Any failing primitive (empty repository, unborn HEAD) counts as
    "not a merge" so trailers are never dropped by accident.
    """
    try:
        head_tree = store.tree_of("HEAD")
        if head_tree is None or store.write_tree() != head_tree:
            return False
        return len(store.parents_of("HEAD")) >= 2
    except ObjectStoreError as e:
        logger.debug(f"Merge detection unavailable, assuming not a merge: {e}")
        return False


def is_merge_commit(
    message_file: Union[str, Path],
    message: Optional[str] = None,
    store: Optional[ObjectStore] = None,
) -> bool:
    """Determine if the commit being created is a merge commit.

    A commit counts as a merge when any of these hold:
    - Git wrote the message to ``MERGE_MSG``
    - the subject starts with ``Merge ``
    - the index matches HEAD's tree and HEAD has 2+ parents

    Args:
        message_file: Path of the message file handed to the hook.
        message: Message text, when already read.
        store: Object store for the parent check; skipped when None.

    Returns:
        True if trailer processing should be skipped entirely.
    """
    # TODO: amended merges with a modified index slip through; prepare-commit-msg
    # receives the commit source and could record it for this hook.
    if Path(message_file).name == MERGE_MESSAGE_FILE:
        return True

    if message is not None and _first_line(message).startswith("Merge "):
        return True

    if store is None:
        return False
    return has_merge_parents(store)
