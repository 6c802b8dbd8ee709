"""Rebuild the file content from the buckets produced by the scanner."""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .model import BackupLine, Intent, Mark, ScanResult

__all__ = ["OutputBuffer", "reconstruct"]

logger = logging.getLogger(__name__)


class OutputBuffer:
    """Ordered list of output lines owned by one reconstruction."""

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self._lines: List[str] = list(lines or [])

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def append(self, line: str = "") -> None:
        self._lines.append(line)

    def restore(self, line_num: int, text: str) -> None:
        """Insert *text* before the line now at position *line_num*, or append."""
        index = line_num - 1
        if 0 <= index < len(self._lines):
            self._lines.insert(index, text)
        else:
            self._lines.append(text)

    def render(self, newline: str = os.linesep) -> str:
        return "".join(f"{line}{newline}" for line in self._lines)


def _restore_all(buffer: OutputBuffer, entries: Iterable[Tuple[str, BackupLine]]) -> List[str]:
    restored = []
    for domain, backup in entries:
        buffer.restore(backup.line_num, backup.text)
        restored.append(domain)
    return restored


def reconstruct(
    scan: ScanResult,
    intent: Intent,
    targets: Optional[Mapping[str, str]] = None,
) -> OutputBuffer:
    """Return the new file content for *scan* as an OutputBuffer.

    The scan result is not modified.
    """
    buffer = OutputBuffer(scan.output)

    if intent is Intent.RESTORE and not targets:
        restored = _restore_all(buffer, scan.backup_data.items())
        logger.debug(f"Restored {len(restored)} backed up lines")
        return buffer

    insert: Dict[str, str] = dict(scan.insert)
    if intent is Intent.UPDATE and targets:
        insert.update(targets)

    restored = set(
        _restore_all(
            buffer,
            ((domain, backup) for domain, backup in scan.backup_data.items() if domain not in insert),
        )
    )

    if insert:
        buffer.append()
        buffer.append(Mark.REGION_START.value)
        for domain, address in insert.items():
            buffer.append(f"{address} {domain}")
        buffer.append(Mark.REGION_END.value)

    backup_lines = [
        backup.annotated()
        for domain, backup in scan.backup_insert.items()
        if domain not in restored
    ]
    backup_lines += [
        backup.annotated()
        for domain, backup in scan.backup_data.items()
        if domain not in restored and domain not in scan.backup_insert
    ]
    if backup_lines:
        buffer.append()
        buffer.append(Mark.BACKUP_START.value)
        for line in backup_lines:
            buffer.append(line)
        buffer.append(Mark.BACKUP_END.value)

    logger.debug(
        f"Reconstructed {len(buffer)} lines: {len(insert)} managed, "
        f"{len(restored)} restored, {len(backup_lines)} backed up"
    )
    return buffer
