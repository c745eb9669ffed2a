"""Trailer parsing and insertion.

A message is scanned top to bottom with a two-state machine:

``IN_BODY``
    Lines are copied to the output. A blank line switches to the trailer zone.
``IN_TRAILER_ZONE``
    Trailer-shaped lines (``Key: value``, ``[...]``, ``(...)``) are buffered.
    A blank line flushes the buffer and stays in the zone; any other line
    flushes the buffer and returns to ``IN_BODY``.

Whatever is still buffered at the end is the message's trailing trailer block,
the only place new trailers are inserted.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..pipeline_types import TrailerSpec

TRAILER_RE = re.compile(r"^[a-zA-Z0-9-]{1,64}: ")
COMMENT_TRAILER_RES = (
    re.compile(r"^\[.+\]$"),
    re.compile(r"^\(.+\)$"),
)

# "Name <email>" either bare or as the value of a "Key: Name <email>" trailer
_USER_INFO_RE = re.compile(r"(?:^|:)\s*([^:<>]+?)\s*<([^<>]+)>\s*$")

DEDUP_KEYS = ("co-authored-by:", "signed-off-by:")
CO_DEVELOPED_BY = "co-developed-by:"


def is_comment_trailer(line: str) -> bool:
    return any(regex.match(line) for regex in COMMENT_TRAILER_RES)


def is_trailer_line(line: str) -> bool:
    """True for ``Key: value`` trailers and ``[...]``/``(...)`` comment trailers."""
    return bool(TRAILER_RE.match(line)) or is_comment_trailer(line)


def has_co_developed_by(message: str) -> bool:
    """Check whether any line starts with ``Co-developed-by:`` (any case)."""
    return any(line.lower().startswith(CO_DEVELOPED_BY) for line in message.split("\n"))


def extract_user_info(text: str) -> Optional[str]:
    """Extract ``Name <email>`` from a bare identity or a trailer line.

    Examples:
        >>> extract_user_info("Signed-off-by: Jane Doe <jane@example.com>")
        'Jane Doe <jane@example.com>'
        >>> extract_user_info("Jane Doe <jane@example.com>")
        'Jane Doe <jane@example.com>'
        >>> extract_user_info("co-authored-by:") is None
        True
    """
    if not text:
        return None
    match = _USER_INFO_RE.search(text)
    if not match:
        return None
    name, email = match.group(1).strip(), match.group(2).strip()
    if not name or not email:
        return None
    return f"{name} <{email}>"


def filter_duplicate_trailers(lines: list[str], co_developed_by: Optional[str]) -> list[str]:
    """Drop Co-authored-by/Signed-off-by lines that credit the co-developer.

    Args:
        lines: Trailer block lines.
        co_developed_by: Identity about to be added as Co-developed-by.

    Returns:
        ``lines`` without attribution lines whose ``Name <email>`` equals the
        co-developer's. Other identities, other trailer kinds and lines that
        cannot be parsed are kept.
    """
    target = extract_user_info(co_developed_by or "")
    if target is None:
        return list(lines)

    kept = []
    for line in lines:
        if line.lower().startswith(DEDUP_KEYS) and extract_user_info(line) == target:
            continue
        kept.append(line)
    return kept


class ScanState(Enum):
    IN_BODY = "in_body"
    IN_TRAILER_ZONE = "in_trailer_zone"


@dataclass
class TrailerScanner:
    """Line-by-line state machine separating body text from the trailer block."""

    state: ScanState = ScanState.IN_BODY
    output: list[str] = field(default_factory=list)
    buffer: list[str] = field(default_factory=list)

    def flush(self) -> None:
        self.output.extend(self.buffer)
        self.buffer.clear()

    def feed(self, line: str) -> None:
        if line == "":
            self.flush()
            self.output.append(line)
            self.state = ScanState.IN_TRAILER_ZONE
        elif self.state is ScanState.IN_BODY:
            self.output.append(line)
        elif is_trailer_line(line):
            self.buffer.append(line)
        else:
            self.flush()
            self.output.append(line)
            self.state = ScanState.IN_BODY

    def feed_all(self, lines: Iterable[str]) -> "TrailerScanner":
        for line in lines:
            self.feed(line)
        return self


def split_trailer_block(message: str) -> tuple[list[str], list[str]]:
    """Split ``message`` into leading lines and its trailing trailer block.

    The leading part keeps the blank line that opens the trailer block. The
    block is empty when the message does not end in one.
    """
    scanner = TrailerScanner().feed_all(message.split("\n"))
    return scanner.output, scanner.buffer


def find_insertion_index(block: list[str]) -> int:
    """Index in ``block`` at which new trailers go.

    After leading comment trailers and before the first real trailer, unless
    that trailer is a Change-Id, in which case new trailers follow it.
    """
    for index, line in enumerate(block):
        if is_comment_trailer(line):
            continue
        if line.startswith("Change-Id:"):
            return index + 1
        return index
    return len(block)


def insert_trailers(message: str, trailers: TrailerSpec) -> str:
    """Merge the requested trailers into ``message``.

    Args:
        message: Cleaned commit message.
        trailers: Trailers to add; absent fields are not touched.

    Returns:
        The message with new trailers placed inside its trailer block, or
        appended after a blank line when it has none. Body lines are never
        reordered.
    """
    new_lines = trailers.lines()
    head, block = split_trailer_block(message)

    if not block:
        if new_lines:
            head.append("")
            head.extend(new_lines)
        return "\n".join(head)

    if trailers.co_developed_by:
        block = filter_duplicate_trailers(block, trailers.co_developed_by)

    index = find_insertion_index(block)
    return "\n".join(head + block[:index] + new_lines + block[index:])
