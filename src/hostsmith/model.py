"""In-memory model rebuilt from the hosts file on every operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple

__all__ = [
    "LEGACY_TAG",
    "BackupLine",
    "Intent",
    "Line",
    "Mark",
    "ParsedEntry",
    "RegionState",
    "ScanResult",
]

# Third token stamped on entries by the first generation of the tool.
LEGACY_TAG = "#Steam++"


class Mark(str, Enum):
    """Sentinel lines delimiting the regions owned by hostsmith."""

    REGION_START = "# Steam++ Start"
    REGION_END = "# Steam++ End"
    BACKUP_START = "# Steam++ Backup Start"
    BACKUP_END = "# Steam++ Backup End"

    @property
    def token_count(self) -> int:
        return len(self.value.split())


class RegionState(Enum):
    OUTSIDE = "outside"
    IN_MANAGED = "managed"
    IN_BACKUP = "backup"


class Intent(Enum):
    """What the shared rewrite routine is asked to do."""

    UPDATE = "update"
    REMOVE = "remove"
    RESTORE = "restore"


@dataclass(frozen=True)
class Line:
    num: int
    text: str


class ParsedEntry(NamedTuple):
    address: str
    domain: str


class BackupLine(NamedTuple):
    """Original line number and text of a line superseded by hostsmith."""

    line_num: int
    text: str

    def annotated(self) -> str:
        return f"#{self.line_num} {self.text}"


@dataclass
class ScanResult:
    """The four buckets accumulated by one forward pass over the file.

    ``output`` holds the lines passed through verbatim, ``insert`` the
    entries destined for the managed region (domain -> address),
    ``backup_insert`` the unmanaged lines superseded during this pass and
    ``backup_data`` the annotated lines decoded from an existing backup
    region.  All three mappings keep insertion order, which is the order
    they are written back in.
    """

    output: List[str] = field(default_factory=list)
    insert: Dict[str, str] = field(default_factory=dict)
    backup_insert: Dict[str, BackupLine] = field(default_factory=dict)
    backup_data: Dict[str, BackupLine] = field(default_factory=dict)
    marks: Dict[Mark, int] = field(default_factory=dict)
    line_count: int = 0
