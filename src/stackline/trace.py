"""
Execution trace: the ordered record of everything observable in a run.

Analysis diagnostics are recorded first, then execution events in the order
the executor produces them.  A listener may be attached to receive each
event as it is recorded (the CLI uses this to stream output).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, List, Optional

from .errors import Diagnostic


class EventKind(Enum):
    DIAGNOSTIC = auto()
    WRITE = auto()
    CALL = auto()
    RETURN = auto()
    FRAME_CREATED = auto()
    FRAME_DELETED = auto()


@dataclass(frozen=True)
class TraceEvent:
    kind: EventKind
    line: int
    name: Optional[str] = None
    address: Optional[int] = None
    value: Optional[int] = None
    target: Optional[int] = None
    cells: Optional[int] = None
    diagnostic: Optional[Diagnostic] = None

    def __str__(self) -> str:
        if self.kind is EventKind.WRITE:
            return f"{self.name} at address {self.address} receives {self.value}"
        if self.kind is EventKind.CALL:
            return f"{self.name}() called in line {self.line}"
        if self.kind is EventKind.RETURN:
            return f"return to line {self.target}"
        if self.kind is EventKind.FRAME_CREATED:
            return f"frame created for {self.name}()"
        if self.kind is EventKind.FRAME_DELETED:
            return f"frame deleted for {self.name}() ({self.cells} cell(s) released)"
        return str(self.diagnostic)


Listener = Callable[[TraceEvent], None]


class Trace:
    """Append-only event log with an optional live listener."""

    def __init__(self, listener: Optional[Listener] = None) -> None:
        self.events: List[TraceEvent] = []
        self.listener = listener

    def __iter__(self) -> Iterator[TraceEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def record(self, event: TraceEvent) -> TraceEvent:
        self.events.append(event)
        if self.listener:
            self.listener(event)
        return event

    # -- convenience recorders ---------------------------------------------

    def diagnostic(self, diagnostic: Diagnostic) -> TraceEvent:
        return self.record(TraceEvent(EventKind.DIAGNOSTIC, diagnostic.line, diagnostic=diagnostic))

    def write(self, line: int, name: str, address: int, value: int) -> TraceEvent:
        return self.record(TraceEvent(EventKind.WRITE, line, name=name, address=address, value=value))

    def call(self, line: int, name: str) -> TraceEvent:
        return self.record(TraceEvent(EventKind.CALL, line, name=name))

    def ret(self, line: int, target: int) -> TraceEvent:
        return self.record(TraceEvent(EventKind.RETURN, line, target=target))

    def frame_created(self, line: int, name: str) -> TraceEvent:
        return self.record(TraceEvent(EventKind.FRAME_CREATED, line, name=name))

    def frame_deleted(self, line: int, name: str, cells: int) -> TraceEvent:
        return self.record(TraceEvent(EventKind.FRAME_DELETED, line, name=name, cells=cells))
