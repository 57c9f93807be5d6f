"""
Diagnostics and exceptions for stackline.

Diagnostics are plain values: the analyzer and executor collect them and keep
going.  Exceptions are reserved for faults the interpreter cannot recover from
(a bad memory address) or that the caller asked to be fatal (strict mode).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Diagnostic container
# ---------------------------------------------------------------------------

class DiagnosticKind(Enum):
    VARIABLE_REDEFINED = "variable redefined"
    VARIABLE_UNKNOWN = "variable unknown"
    FUNCTION_REDEFINED = "function redefined"
    FUNCTION_UNKNOWN = "function unknown"
    UNMATCHED_LINE = "unmatched line"
    UNBALANCED_BLOCK = "unbalanced block"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    subject: str  # offending name, or the line text for unmatched lines
    line: int

    @property
    def message(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.subject} (line {self.line})"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class StacklineError(Exception):
    """Base class for all stackline errors"""
    pass


class MemoryFault(StacklineError):
    """Invalid use of the flat memory store"""
    pass


class BoundsViolation(MemoryFault):
    """Address outside the live region of memory"""
    pass


class UnbalancedBlockError(StacklineError):
    """A block end without a live call, or a call that never returned"""

    def __init__(self, diagnostic: Diagnostic, message: Optional[str] = None):
        super().__init__(message or str(diagnostic))
        self.diagnostic = diagnostic
