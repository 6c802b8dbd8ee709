from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

__all__ = ["Platform", "default_hosts_path"]

logger = logging.getLogger(__name__)


def default_hosts_path() -> Path:
    """Return the system hosts file location for the running OS."""
    if sys.platform.startswith("win"):
        root = os.environ.get("SystemRoot", r"C:\Windows")
        return Path(root) / "System32" / "drivers" / "etc" / "hosts"
    return Path("/etc/hosts")


class Platform:
    """Platform services used by the hosts manager."""

    def __init__(self, hosts_file: Optional[Path] = None) -> None:
        self._hosts_file = Path(hosts_file) if hosts_file is not None else None

    def hosts_file_path(self) -> Path:
        path = self._hosts_file or default_hosts_path()
        return path.expanduser().absolute()

    def open_in_viewer(self, path: Path) -> int:
        """Open *path* with the user's default text viewer."""
        logger.info(f"📝 Opening {path} in text viewer")
        return click.launch(str(path))
