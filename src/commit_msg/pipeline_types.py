"""Shared result dataclasses for the commit-msg pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CleanResult:
    """Outcome of the normalization stage."""

    message: str = ""
    should_save: bool = False


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one hook invocation.

    The caller writes ``message`` back to the message file only when
    ``should_save`` is true.
    """

    message: str = ""
    should_save: bool = False


@dataclass(frozen=True)
class TrailerSpec:
    """Trailers requested for insertion.

    ``None`` (or an empty string) means the trailer kind is left untouched.
    """

    change_id: Optional[str] = None
    co_developed_by: Optional[str] = None

    def lines(self) -> list[str]:
        """Render the requested trailers, Change-Id first."""
        rendered = []
        if self.change_id:
            rendered.append(f"Change-Id: {self.change_id}")
        if self.co_developed_by:
            rendered.append(f"Co-developed-by: {self.co_developed_by}")
        return rendered

    def is_empty(self) -> bool:
        return not self.change_id and not self.co_developed_by
