"""Pure line classification helpers.

A hosts line is split on runs of whitespace.  Three outcomes matter to the
rewriter:

* the line is one of the four region marks,
* the line is an *effective entry* (``address domain [#comment]``),
* anything else, which is passed through untouched.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from .model import LEGACY_TAG, BackupLine, Line, Mark, ParsedEntry

__all__ = [
    "classify",
    "decode_backup_line",
    "is_legacy_entry",
    "parse_entry",
    "split_lines",
    "tokenize",
]

_ANNOTATED_RE = re.compile(r"^\s*#(?P<num>\d+)[ \t](?P<text>.*)$")

_MARKS_BY_VALUE = {mark.value.lower(): mark for mark in Mark}

_BOM = "\ufeff"


def tokenize(raw: str) -> List[str]:
    return raw.split()


def split_lines(text: str) -> Iterator[Line]:
    """Yield numbered lines, accepting both LF and CRLF endings.

    A leading byte order mark (Notepad saves one) is not part of line 1.
    """
    if text.startswith(_BOM):
        text = text[1:]
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for num, raw in enumerate(parts, start=1):
        yield Line(num, raw[:-1] if raw.endswith("\r") else raw)


def _match_mark(tokens: List[str]) -> Optional[Mark]:
    if len(tokens) not in (3, 4):
        return None
    mark = _MARKS_BY_VALUE.get(" ".join(tokens).lower())
    if mark is not None and mark.token_count == len(tokens):
        return mark
    return None


def classify(raw: str) -> Tuple[List[str], Optional[Mark]]:
    """Return the tokens of *raw* and the mark it represents, if any."""
    tokens = tokenize(raw)
    return tokens, _match_mark(tokens)


def parse_entry(tokens: List[str]) -> Optional[ParsedEntry]:
    """Return the ``(address, domain)`` pair of an effective entry.

    ``None`` is returned for comments, blank or single-token lines and lines
    whose third token is not a trailing comment.
    """
    if len(tokens) < 2:
        return None
    if tokens[0].startswith("#"):
        return None
    if len(tokens) > 2 and not tokens[2].startswith("#"):
        return None
    return ParsedEntry(tokens[0], tokens[1])


def is_legacy_entry(tokens: List[str]) -> bool:
    return len(tokens) > 2 and tokens[2] == LEGACY_TAG


def decode_backup_line(raw: str) -> Optional[Tuple[str, BackupLine]]:
    """Decode an annotated ``#<line_num> <original line>`` backup line.

    Returns ``(domain, BackupLine)`` or ``None`` when *raw* is not in the
    annotated format or the wrapped text carries no domain.
    """
    match = _ANNOTATED_RE.match(raw)
    if match is None:
        return None
    line_num = int(match.group("num"))
    if line_num < 1:
        return None
    text = match.group("text")
    inner = tokenize(text)
    if len(inner) < 2:
        return None
    return inner[1], BackupLine(line_num, text)
