from __future__ import annotations

import logging
import os
import stat
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from .config import DEFAULT_MAX_SIZE
from .exceptions import HostsNotFoundError, HostsTooLargeError
from .messages import message

__all__ = [
    "PreflightGuard",
    "PreflightReport",
    "is_read_only",
    "set_read_only",
]

logger = logging.getLogger(__name__)


def is_read_only(path: Path) -> bool:
    return not (os.stat(path).st_mode & stat.S_IWRITE)


def set_read_only(path: Path, read_only: bool) -> None:
    """Toggle the owner write bit (the read-only attribute on Windows)."""
    mode = stat.S_IMODE(os.stat(path).st_mode)
    if read_only:
        mode &= ~(stat.S_IWRITE | stat.S_IWGRP | stat.S_IWOTH)
    else:
        mode |= stat.S_IWRITE
    os.chmod(path, mode)


@dataclass
class PreflightReport:
    ok: bool
    path: Path
    size: Optional[int] = None
    read_only: bool = False
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def pretty(self) -> str:
        lines: List[str] = []
        if self.errors:
            lines.append("[red]Errors:[/red]")
            lines += [f"  - {e}" for e in self.errors]
        if self.warnings:
            lines.append("[yellow]Warnings:[/yellow]")
            lines += [f"  - {w}" for w in self.warnings]
        if self.suggestions:
            lines.append("[cyan]Suggestions:[/cyan]")
            lines += [f"  - {s}" for s in self.suggestions]
        if not (self.errors or self.warnings or self.suggestions):
            lines.append("All preflight checks passed.")
        return "\n".join(lines)


class PreflightGuard:
    """Checks run against the hosts file before it is read or rewritten."""

    def __init__(self, path: Path, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self.path = Path(path)
        self.max_size = max_size

    def check(self, check_size: bool = True) -> int:
        """Raise if the file is missing or too large; return its size."""
        if not self.path.is_file():
            raise HostsNotFoundError(message("not_found"), {"path": str(self.path)})
        size = self.path.stat().st_size
        if check_size and size > self.max_size:
            raise HostsTooLargeError(
                message("too_large"),
                {"path": str(self.path), "size": size, "max_size": self.max_size},
            )
        return size

    @contextmanager
    def acquire(self, check_size: bool = True, clear_read_only: bool = False) -> Iterator[bool]:
        """Validate the file and make it writable for the duration of the block.

        Yields whether the read-only attribute was cleared.  A cleared
        attribute is put back on every exit path, restoring the exact
        permission bits the file had before.
        """
        self.check(check_size=check_size)
        cleared = False
        if clear_read_only and is_read_only(self.path):
            original_mode = stat.S_IMODE(os.stat(self.path).st_mode)
            set_read_only(self.path, False)
            cleared = True
            logger.debug(f"Cleared read-only attribute on {self.path}")
        try:
            yield cleared
        finally:
            if cleared:
                try:
                    os.chmod(self.path, original_mode)
                    logger.debug(f"Restored read-only attribute on {self.path}")
                except OSError as exc:
                    logger.warning(f"⚠️ Could not restore read-only attribute on {self.path}: {exc}")

    def report(self, check_size: bool = True) -> PreflightReport:
        warnings: List[str] = []
        errors: List[str] = []
        suggestions: List[str] = []

        logger.info("Running preflight checks...")

        if not self.path.is_file():
            errors.append(f"Hosts file not found: {self.path}")
            suggestions.append("Point --hosts-file or HOSTSMITH_HOSTS_FILE at an existing file")
            return PreflightReport(ok=False, path=self.path, errors=errors, suggestions=suggestions)

        size = self.path.stat().st_size
        if check_size and size > self.max_size:
            errors.append(f"Hosts file is {size} bytes, above the {self.max_size} byte limit")
            suggestions.append("Pass --no-size-check or raise --max-size to process it anyway")

        read_only = is_read_only(self.path)
        if read_only:
            warnings.append("Hosts file is read-only; it will be made writable during each change")

        if not os.access(self.path, os.R_OK):
            errors.append("Hosts file is not readable by the current user")
        elif not read_only and not os.access(self.path, os.W_OK):
            errors.append("Hosts file is not writable by the current user")
            suggestions.append("Run hostsmith with elevated privileges (e.g. sudo)")

        logger.info("Preflight checks completed.")
        return PreflightReport(
            ok=not errors,
            path=self.path,
            size=size,
            read_only=read_only,
            warnings=warnings,
            errors=errors,
            suggestions=suggestions,
        )
