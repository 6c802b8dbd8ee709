from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from .exceptions import HostsmithError

__all__ = ["DEFAULT_ENV_FILE", "DEFAULT_MAX_SIZE", "ENV_PREFIX", "HostsConfig"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 52428800  # 50 MiB
DEFAULT_ENV_FILE = ".env.hostsmith"
ENV_PREFIX = "HOSTSMITH_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise HostsmithError(f"Invalid boolean for {key}: {value!r}", {"key": key})


def _as_int(key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise HostsmithError(f"Invalid integer for {key}: {value!r}", {"key": key}) from exc


_NEWLINES = {"lf": "\n", "crlf": "\r\n", "native": os.linesep}


@dataclass(frozen=True)
class HostsConfig:
    """Settings for one hostsmith session.

    Values come from ``HOSTSMITH_*`` keys in an optional dotenv file,
    overridden by the process environment, overridden by explicit
    arguments (usually CLI options).
    """

    hosts_file: Optional[Path] = None
    max_size: int = DEFAULT_MAX_SIZE
    check_size: bool = True
    clear_read_only: bool = True
    encoding: str = "utf-8"
    newline: str = os.linesep

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "HostsConfig":
        kwargs: Dict[str, Any] = {}
        for key, raw in values.items():
            if raw is None or not key.startswith(ENV_PREFIX):
                continue
            name = key[len(ENV_PREFIX):].lower()
            if name == "hosts_file":
                kwargs["hosts_file"] = Path(raw).expanduser()
            elif name == "max_size":
                kwargs["max_size"] = _as_int(key, raw)
            elif name in ("check_size", "clear_read_only"):
                kwargs[name] = _as_bool(key, raw)
            elif name == "encoding":
                kwargs["encoding"] = raw.strip()
            elif name == "newline":
                newline = _NEWLINES.get(raw.strip().lower())
                if newline is None:
                    raise HostsmithError(
                        f"Invalid newline for {key}: {raw!r} (expected lf, crlf or native)",
                        {"key": key},
                    )
                kwargs["newline"] = newline
            else:
                logger.debug(f"Ignoring unknown setting {key}")
        return cls(**kwargs)

    @classmethod
    def load(cls, env_file: Optional[str | Path] = None, **overrides: Any) -> "HostsConfig":
        """Build a config from *env_file*, the environment and *overrides*.

        Overrides whose value is ``None`` are ignored.
        """
        values: Dict[str, Optional[str]] = {}
        if env_file is not None and Path(env_file).exists():
            values.update(dotenv_values(env_file))
            logger.debug(f"Loaded settings from {env_file}")
        values.update({k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)})
        config = cls.from_mapping(values)
        return config.with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "HostsConfig":
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "hosts_file" in changes:
            changes["hosts_file"] = Path(changes["hosts_file"])
        return replace(self, **changes) if changes else self
