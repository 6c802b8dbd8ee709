"""hostsmith - region-aware hosts file rewriter"""
from __future__ import annotations

__version__ = "0.1.0"

from .config import HostsConfig  # noqa: E402
from .hosts_manager import HostsManager  # noqa: E402
from .model import Intent, Mark  # noqa: E402
from .results import OperationResult  # noqa: E402

__all__: list[str] = [
    "HostsConfig",
    "HostsManager",
    "Intent",
    "Mark",
    "OperationResult",
]
