"""User facing labels keyed by scenario.

Callers that need translated strings can register their own catalogue with
:func:`set_catalogue`; unknown keys fall back to the key itself.
"""

from __future__ import annotations

from typing import Dict, Mapping

__all__ = ["DEFAULT_MESSAGES", "message", "set_catalogue"]

DEFAULT_MESSAGES: Dict[str, str] = {
    "not_found": "hosts file was not found",
    "too_large": "hosts file is too large",
    "empty_targets": "no hosts entries were given",
    "write_error": "failed to write the hosts file",
    "read_error": "failed to read the hosts file",
    "update_success": "hosts file updated",
    "remove_success": "hosts entries removed",
    "restore_success": "hosts file restored",
    "read_success": "hosts file read",
}

_catalogue: Dict[str, str] = dict(DEFAULT_MESSAGES)


def set_catalogue(catalogue: Mapping[str, str]) -> None:
    """Replace the active labels; keys missing from *catalogue* keep their default."""
    _catalogue.clear()
    _catalogue.update(DEFAULT_MESSAGES)
    _catalogue.update(catalogue)


def message(key: str) -> str:
    return _catalogue.get(key, key)
