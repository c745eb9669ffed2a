"""Commit message normalization.

Mirrors what ``git commit --cleanup=strip`` does to a message before it is
stored, so that the Change-Id is computed over the text Git will actually
record and trailers are placed relative to the final layout.
"""

import re

from ..pipeline_types import CleanResult

DIFF_MARKER = "diff --git "

# After the comment prefix: optional dashes/whitespace, the marker, then the same again
_SCISSORS_RE = re.compile(r"^[\s-]*(?:>8|8<)[\s-]*$")

_SIGNED_OFF_BY = "signed-off-by:"


def is_scissors_line(line: str, comment_char: str = "#") -> bool:
    """Check whether a comment line is a scissors cut marker.

    Examples:
        >>> is_scissors_line("# ------------------------ >8 ------------------------")
        True
        >>> is_scissors_line("# >8 keep going")
        False
    """
    if not line.startswith(comment_char):
        return False
    return bool(_SCISSORS_RE.match(line[len(comment_char):]))


def is_effectively_empty(lines: list[str]) -> bool:
    """True when every non-blank line is a Signed-off-by trailer."""
    return all(
        line.strip().lower().startswith(_SIGNED_OFF_BY)
        for line in lines
        if line.strip()
    )


def clean_commit_message(message: str, comment_char: str = "#") -> CleanResult:
    """Clean a raw commit message.

    Processing is line oriented:

    - everything from the first ``diff --git`` line on is dropped
      (``git commit --verbose`` appends the staged diff);
    - a scissors comment line drops itself and everything below it;
    - other comment lines are dropped;
    - trailing whitespace is trimmed, blank runs collapse to one blank line,
      leading and trailing blank lines are removed;
    - a blank line is inserted between subject and body when missing.

    Args:
        message: Raw message text as read from the message file.
        comment_char: Comment prefix from ``core.commentChar``.

    Returns:
        CleanResult whose ``should_save`` is true only when the subject/body
        separator had to be inserted. Messages left with nothing but blank or
        Signed-off-by lines come back as ``CleanResult("", False)``.
    """
    processed: list[str] = []
    last_was_blank = True

    for line in message.split("\n"):
        if line.startswith(DIFF_MARKER):
            break

        if comment_char and line.startswith(comment_char):
            if is_scissors_line(line, comment_char):
                break
            continue

        trimmed = line.rstrip()
        if not trimmed:
            if not last_was_blank:
                processed.append("")
                last_was_blank = True
            continue

        processed.append(trimmed)
        last_was_blank = False

    while processed and processed[-1] == "":
        processed.pop()

    if is_effectively_empty(processed):
        return CleanResult("", False)

    should_save = False
    if len(processed) >= 2 and processed[1] != "":
        processed.insert(1, "")
        should_save = True

    return CleanResult("\n".join(processed), should_save)
