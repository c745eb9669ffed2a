"""Verbose mode utilities.

Centralises the COMMIT_MSG_VERBOSE environment variable check so that the
CLI and the installed hook script agree on when to print progress output.
"""

import os
from collections.abc import Mapping
from typing import Optional


def is_verbose_mode(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when COMMIT_MSG_VERBOSE is set to a truthy value.

    Truthy values: "1", "true", "yes" (case-insensitive).
    All other values, including an unset variable, return False.

    Args:
        env: Environment mapping to consult. Defaults to ``os.environ``.

    Returns:
        True if verbose mode is active, False otherwise.
    """
    source = os.environ if env is None else env
    return source.get("COMMIT_MSG_VERBOSE", "").lower() in ("1", "true", "yes")
