"""commit-msg - Git commit-msg hook adding Change-Id and Co-developed-by trailers."""

from ._version import __version__
from .config import GitConfig
from .pipeline import process_commit_message, run_hook
from .pipeline_types import CleanResult, ProcessResult, TrailerSpec

__all__ = [
    "__version__",
    "GitConfig",
    "CleanResult",
    "ProcessResult",
    "TrailerSpec",
    "process_commit_message",
    "run_hook",
]
