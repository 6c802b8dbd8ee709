"""Pytest configuration and reusable fixtures for hostsmith tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

# ---------------------------------------------------------------------------
# Test path setup – make sure `src/` is importable when tests are invoked from
# the project root (e.g. on CI) without installing the package.
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hostsmith.config import HostsConfig  # noqa: E402
from hostsmith.hosts_manager import HostsManager  # noqa: E402


# ---------------------------------------------------------------------------
# Generic fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def hosts_path(tmp_path: Path) -> Path:
    """Location of a scratch hosts file (not created)."""
    return tmp_path / "hosts"


@pytest.fixture()
def write_hosts(hosts_path: Path) -> Callable[[str], Path]:
    """Write *content* to the scratch hosts file byte for byte."""

    def _write(content: str) -> Path:
        hosts_path.write_bytes(content.encode("utf-8"))
        return hosts_path

    return _write


@pytest.fixture()
def read_hosts(hosts_path: Path) -> Callable[[], str]:
    def _read() -> str:
        return hosts_path.read_bytes().decode("utf-8")

    return _read


@pytest.fixture()
def manager(hosts_path: Path) -> HostsManager:
    """HostsManager bound to the scratch file, writing LF line endings."""
    return HostsManager(HostsConfig(hosts_file=hosts_path, newline="\n"))
