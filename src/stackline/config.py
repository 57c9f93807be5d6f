"""Interpreter configuration.

Resolution order: dataclass defaults, then environment variables
(``STACKLINE_STRICT``, ``STACKLINE_LOG_LEVEL``), then explicit overrides
such as CLI options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


@dataclass(frozen=True)
class InterpreterConfig:
    strict: bool = False  # raise UnbalancedBlockError instead of recording it
    log_level: str = "WARNING"
    show_tables: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InterpreterConfig":
        environ = os.environ if environ is None else environ
        default = cls()
        return cls(
            strict=_parse_bool(environ.get("STACKLINE_STRICT"), default.strict),
            log_level=environ.get("STACKLINE_LOG_LEVEL", default.log_level).upper(),
            show_tables=default.show_tables,
        )

    def with_overrides(self, **overrides: Any) -> "InterpreterConfig":
        """Apply every override that is not ``None``."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "log_level" in changes:
            changes["log_level"] = str(changes["log_level"]).upper()
        return replace(self, **changes)

    @property
    def logging_level(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING
