from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from .classifier import split_lines
from .config import HostsConfig
from .exceptions import (
    EmptyTargetSetError,
    HostsIOError,
    HostsmithError,
    handle_errors,
)
from .messages import message
from .model import Intent, ParsedEntry
from .platform_service import Platform
from .preflight import PreflightGuard
from .reconstructor import reconstruct
from .results import OperationResult
from .scanner import iter_entries, scan

__all__ = ["HostsManager"]

logger = logging.getLogger(__name__)

_SUCCESS_KEYS = {
    Intent.UPDATE: "update_success",
    Intent.REMOVE: "remove_success",
    Intent.RESTORE: "restore_success",
}


def _require_targets(intent: Intent, targets: Optional[Mapping[str, str]]) -> None:
    # Update and Remove need at least one domain; only Restore-All acts on the whole file.
    if intent is not Intent.RESTORE and not targets:
        raise EmptyTargetSetError(message("empty_targets"))


class HostsManager:
    """Safely manage hosts file entries owned by hostsmith.

    Entries written by hostsmith live between ``# Steam++ Start`` and
    ``# Steam++ End``.  Lines that were already in the file and get
    overridden or removed are kept, annotated with their original line
    number, between ``# Steam++ Backup Start`` and ``# Steam++ Backup End``
    so that :meth:`remove_hosts_by_tag` can put them back.

    Every write operation reads the whole file once, rebuilds it in memory
    and writes it back in one go.  Parse errors abort before anything is
    written.
    """

    def __init__(self, config: Optional[HostsConfig] = None, platform: Optional[Platform] = None) -> None:
        self.config = config or HostsConfig()
        self.platform = platform or Platform(self.config.hosts_file)

    @property
    def path(self) -> Path:
        return self.platform.hosts_file_path()

    def _guard(self, max_size: Optional[int] = None) -> PreflightGuard:
        return PreflightGuard(self.path, self.config.max_size if max_size is None else max_size)

    def _check_size(self, check_size: Optional[bool]) -> bool:
        return self.config.check_size if check_size is None else check_size

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    @handle_errors(HostsIOError, logger)
    def _read_text(self, path: Path) -> str:
        return path.read_text(encoding=self.config.encoding)

    @handle_errors(HostsIOError, logger)
    def _write_text(self, path: Path, content: str) -> None:
        # Line endings are already rendered; disable newline translation.
        with path.open("w", encoding=self.config.encoding, newline="") as fp:
            fp.write(content)

    def _rewrite(self, path: Path, intent: Intent, targets: Optional[Mapping[str, str]]) -> str:
        lines = split_lines(self._read_text(path))
        result = scan(lines, intent, targets)
        buffer = reconstruct(result, intent, targets)
        return buffer.render(self.config.newline)

    # ------------------------------------------------------------------
    # Shared rewrite routine
    # ------------------------------------------------------------------

    def _handle_hosts(
        self,
        intent: Intent,
        targets: Optional[Mapping[str, str]] = None,
        check_size: Optional[bool] = None,
        max_size: Optional[int] = None,
    ) -> OperationResult[str]:
        path = self.path
        logger.info(f"🛠️ {intent.value} {path} ({len(targets or {})} target entries)")
        try:
            _require_targets(intent, targets)
            guard = self._guard(max_size)
            with guard.acquire(self._check_size(check_size), self.config.clear_read_only):
                content = self._rewrite(path, intent, targets)
                self._write_text(path, content)
        except HostsmithError as exc:
            logger.error(f"❌ {intent.value} failed: {exc.message}")
            return OperationResult.failed(exc.message, exc)
        except OSError as exc:
            error = HostsIOError(f"{message('write_error')}: {exc}", {"path": str(path)})
            logger.error(f"❌ {intent.value} failed: {error.message}")
            return OperationResult.failed(error.message, error)

        logger.info(f"✅ {intent.value} written to {path}")
        return OperationResult.ok(message(_SUCCESS_KEYS[intent]), data=content)

    def preview(
        self,
        intent: Intent,
        targets: Optional[Mapping[str, str]] = None,
        check_size: Optional[bool] = None,
        max_size: Optional[int] = None,
    ) -> str:
        """Return the content a write operation would produce, without writing."""
        _require_targets(intent, targets)
        self._guard(max_size).check(self._check_size(check_size))
        return self._rewrite(self.path, intent, targets)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update_hosts(self, hosts: Mapping[str, str], **kwargs) -> OperationResult[str]:
        """Point every domain in *hosts* (domain -> address) at its address."""
        return self._handle_hosts(Intent.UPDATE, dict(hosts), **kwargs)

    def update_host(self, address: str, domain: str, **kwargs) -> OperationResult[str]:
        return self.update_hosts({domain: address}, **kwargs)

    def update_hosts_pairs(self, hosts: Iterable[Tuple[str, str]], **kwargs) -> OperationResult[str]:
        """Like update_hosts, from ``(address, domain)`` pairs; later pairs win."""
        return self.update_hosts({domain: address for address, domain in hosts}, **kwargs)

    def remove_host(self, domain: str, address: str = "", **kwargs) -> OperationResult[str]:
        """Remove *domain*; *address* is accepted for symmetry and not matched."""
        return self._handle_hosts(Intent.REMOVE, {domain: address}, **kwargs)

    def remove_hosts(self, domains: Iterable[str], **kwargs) -> OperationResult[str]:
        return self._handle_hosts(Intent.REMOVE, {domain: "" for domain in domains}, **kwargs)

    def remove_hosts_by_tag(self, **kwargs) -> OperationResult[str]:
        """Drop both hostsmith regions and put every backed up line back."""
        return self._handle_hosts(Intent.RESTORE, **kwargs)

    def iter_entries(self, check_size: Optional[bool] = None) -> Iterator[ParsedEntry]:
        """Lazily yield ``(address, domain)`` for every effective entry."""
        path = self.path
        self._guard().check(self._check_size(check_size))
        yield from iter_entries(split_lines(self._read_text(path)))

    def read_all_lines(self, check_size: Optional[bool] = None) -> OperationResult[List[ParsedEntry]]:
        try:
            entries = list(self.iter_entries(check_size))
        except HostsmithError as exc:
            logger.error(f"❌ Reading {self.path} failed: {exc.message}")
            return OperationResult.failed(exc.message, exc)
        return OperationResult.ok(message("read_success"), data=entries)

    def open_file(self) -> None:
        self.platform.open_in_viewer(self.path)
