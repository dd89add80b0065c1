"""Heuristic clean-up of raw model replies into plain source text."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

FENCE = "```"
# A whole fence line, opening (with any info string) or closing.
FENCE_LINE = re.compile(r"^[ \t]*```[^`\n]*$", re.MULTILINE)

CODE_PREFIXES = (
    "function ",
    "def ",
    "class ",
    "import ",
    "from ",
    "const ",
    "let ",
    "var ",
    "#include",
    "async ",
    "export ",
    "package ",
    "func ",
    "fn ",
    "public ",
)
COMMENTARY_PREFIXES = ("Note:", "Example:")


def strip_fences(text: str) -> str:
    """Blank out fence lines with their info string, then drop any inline fences."""
    text = FENCE_LINE.sub("", text)
    return text.replace(FENCE, "")


def split_lines(text: str) -> list[str]:
    # Only \n and \r\n end a line; form feeds and unicode separators stay in the code.
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def sanitize(raw_text: str) -> str:
    """Strip markdown fences and surrounding prose from a model reply.

    Never fails: when no line looks like code the text is only de-fenced and
    stripped.
    """
    code = strip_fences(raw_text).strip()
    lines = split_lines(code) if code else []

    start = 0
    for index, line in enumerate(lines):
        if line.strip().startswith(CODE_PREFIXES):
            start = index
            break

    end = len(lines)
    for index in range(len(lines) - 1, -1, -1):
        trimmed = lines[index].strip()
        if trimmed and not trimmed.startswith(COMMENTARY_PREFIXES):
            end = index + 1
            break

    if start or end < len(lines):
        logger.debug("Trimmed reply to lines %d..%d of %d", start, end, len(lines))
    return "\n".join(lines[start:end]).strip()
