"""Region-aware forward scan over the lines of a hosts file."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping, Optional, Set

from .classifier import classify, decode_backup_line, is_legacy_entry, parse_entry
from .exceptions import DuplicateDomainError, DuplicateMarkError
from .model import BackupLine, Intent, Line, Mark, ParsedEntry, RegionState, ScanResult

__all__ = ["DomainRegistry", "iter_entries", "next_state", "scan"]

logger = logging.getLogger(__name__)

_START_MARKS = (Mark.REGION_START, Mark.BACKUP_START)


class DomainRegistry:
    """Domains seen so far in one scan, used for duplicate detection."""

    def __init__(self) -> None:
        self._domains: Set[str] = set()

    def __contains__(self, domain: str) -> bool:
        return domain in self._domains

    def add(self, domain: str, line_num: int) -> None:
        if domain in self._domains:
            raise DuplicateDomainError(domain, line_num)
        self._domains.add(domain)

    def discard(self, domain: str) -> None:
        self._domains.discard(domain)


def next_state(state: RegionState, mark: Mark) -> RegionState:
    """Return the region entered after reading *mark* while in *state*.

    An end mark only closes the region that is currently open; a stray end
    mark leaves the state untouched.
    """
    if mark is Mark.REGION_START:
        return RegionState.IN_MANAGED
    if mark is Mark.BACKUP_START:
        return RegionState.IN_BACKUP
    if mark is Mark.REGION_END and state is RegionState.IN_MANAGED:
        return RegionState.OUTSIDE
    if mark is Mark.BACKUP_END and state is RegionState.IN_BACKUP:
        return RegionState.OUTSIDE
    return state


def scan(
    lines: Iterable[Line],
    intent: Intent,
    targets: Optional[Mapping[str, str]] = None,
) -> ScanResult:
    """Classify every line and sort it into the buckets of a ScanResult.

    *targets* maps the domains touched by this operation to their new
    address (the address is ignored for removals).  Raises
    DuplicateDomainError or DuplicateMarkError before anything is written.
    """
    targets = targets or {}
    result = ScanResult()
    registry = DomainRegistry()
    state = RegionState.OUTSIDE

    for line in lines:
        result.line_count = line.num
        tokens, mark = classify(line.text)

        if mark is not None:
            if mark in result.marks:
                raise DuplicateMarkError(mark.value, line.num)
            result.marks[mark] = line.num
            # Each block is written with one blank separator line before it.
            if mark in _START_MARKS and result.output and not result.output[-1].strip():
                result.output.pop()
            state = next_state(state, mark)
            continue

        if state is RegionState.IN_BACKUP:
            decoded = decode_backup_line(line.text)
            if decoded is not None:
                domain, backup = decoded
                if domain not in result.backup_data:
                    result.backup_data[domain] = backup
                else:
                    logger.debug(f"Ignoring repeated backup line {line.num} for {domain}")
            continue

        entry = parse_entry(tokens)
        if entry is None:
            result.output.append(line.text)
            continue

        if is_legacy_entry(tokens):
            logger.debug(f"Dropping legacy tagged entry on line {line.num}: {entry.domain}")
            registry.discard(entry.domain)
            continue

        registry.add(entry.domain, line.num)
        matched = entry.domain in targets

        if state is RegionState.IN_MANAGED:
            if not matched:
                result.insert[entry.domain] = entry.address
            elif intent is Intent.UPDATE:
                result.insert[entry.domain] = targets[entry.domain]
            continue

        if matched:
            if intent is Intent.UPDATE:
                result.insert[entry.domain] = targets[entry.domain]
            result.backup_insert[entry.domain] = BackupLine(line.num, line.text)
            continue

        result.output.append(line.text)

    logger.debug(
        f"Scanned {result.line_count} lines: {len(result.output)} passed through, "
        f"{len(result.insert)} managed, {len(result.backup_insert)} superseded, "
        f"{len(result.backup_data)} backed up"
    )
    return result


def iter_entries(lines: Iterable[Line]) -> Iterator[ParsedEntry]:
    """Yield every effective entry without any region awareness."""
    registry = DomainRegistry()
    for line in lines:
        if not line.text.strip():
            continue
        tokens, mark = classify(line.text)
        if mark is not None:
            continue
        entry = parse_entry(tokens)
        if entry is None:
            continue
        registry.add(entry.domain, line.num)
        yield entry
