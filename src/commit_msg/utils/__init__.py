"""Utility modules for commit-msg."""

from .debug import is_verbose_mode

__all__ = [
    "is_verbose_mode",
]
