"""Configuration management for commit-msg.

All settings live in Git's own config store so they can be set per repository
or globally with ``git config``:

==============================  ============================================
Key                             Meaning
==============================  ============================================
``gerrit.createChangeId``       add Change-Id (aliases ``commit-msg.changeid``,
                                ``commitmsg.changeid``)
``commit-msg.coDevelopedBy``    add Co-developed-by (alias
                                ``commitmsg.codevelopedby``)
``core.commentChar``            comment prefix stripped from messages
==============================  ============================================
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import git

logger = logging.getLogger(__name__)

CHANGE_ID_KEYS = ("gerrit.createchangeid", "commit-msg.changeid", "commitmsg.changeid")
CO_DEVELOPED_BY_KEYS = ("commit-msg.codevelopedby", "commitmsg.codevelopedby")
COMMENT_CHAR_KEY = "core.commentchar"

DEFAULT_COMMENT_CHAR = "#"

_TRUTHY = ("true", "yes", "on", "1")

ConfigLookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class GitConfig:
    """Hook settings, read once per invocation."""

    create_change_id: bool = True
    comment_char: str = DEFAULT_COMMENT_CHAR
    create_co_developed_by: bool = True


class GitConfigReader:
    """Read single keys from Git's config store through GitPython."""

    def __init__(self, working_dir: Union[str, Path, None] = None) -> None:
        self.git = git.Git(working_dir)

    def _get(self, key: str, *flags: str) -> Optional[str]:
        try:
            value = self.git.config(*flags, "--get", key)
        except git.GitCommandError as e:
            # Exit status 1 just means the key is unset
            if e.status != 1:
                logger.debug(f"git config --get {key} failed: {e}")
            return None
        return value.strip()

    def __call__(self, key: str) -> Optional[str]:
        return self._get(key)

    def get_bool(self, key: str) -> Optional[str]:
        """Read ``key`` canonicalised by Git to ``"true"`` or ``"false"``.

        A key written without a value (``[gerrit] createChangeId``) reads as
        an empty string through a plain lookup but is true to Git.
        """
        return self._get(key, "--bool")


def parse_bool(value: str) -> bool:
    """Parse a Git boolean leniently: true/yes/on/1 (any case) are true."""
    return value.strip().lower() in _TRUTHY


def _first_set(lookup: ConfigLookup, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = lookup(key)
        if value is not None:
            return value
    return None


def _bool_option(lookup: ConfigLookup, keys: Sequence[str], default: bool) -> bool:
    value = _first_set(lookup, keys)
    if value is None:
        return default
    return parse_bool(value)


def load_git_config(lookup: Union[ConfigLookup, Mapping[str, str], None] = None) -> GitConfig:
    """Load hook settings from the Git config store.

    Args:
        lookup: Callable returning a key's value or None, or a plain mapping.
                Defaults to a GitConfigReader for the current directory.

    Returns:
        GitConfig; defaults are used for unset keys and when Git cannot be
        queried at all.
    """
    if lookup is None:
        lookup = GitConfigReader()
    elif isinstance(lookup, Mapping):
        lookup = lookup.get

    # Readers that can canonicalise booleans are asked to for the on/off keys
    bool_lookup = getattr(lookup, "get_bool", lookup)

    try:
        comment_char = _first_set(lookup, (COMMENT_CHAR_KEY,))
        if not comment_char or comment_char == "auto":
            comment_char = DEFAULT_COMMENT_CHAR

        return GitConfig(
            create_change_id=_bool_option(bool_lookup, CHANGE_ID_KEYS, True),
            comment_char=comment_char,
            create_co_developed_by=_bool_option(bool_lookup, CO_DEVELOPED_BY_KEYS, True),
        )
    except Exception as e:
        logger.warning(f"Could not read Git configuration, using defaults: {e}")
        return GitConfig()
