# instructions.py
"""Instruction variants produced by the lexer, one per source line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")


def parse_literal(literal: str) -> Optional[int]:
    """Parse a signed 32-bit integer literal, or return None."""
    if not _INT_LITERAL.fullmatch(literal):
        return None
    value = int(literal)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


@dataclass(frozen=True)
class Instruction:
    line: int
    text: str


@dataclass(frozen=True)
class Blank(Instruction):
    pass


@dataclass(frozen=True)
class Declare(Instruction):
    name: str


@dataclass(frozen=True)
class Assign(Instruction):
    name: str
    literal: str

    @property
    def value(self) -> Optional[int]:
        return parse_literal(self.literal)


@dataclass(frozen=True)
class FuncDecl(Instruction):
    name: str


@dataclass(frozen=True)
class Call(Instruction):
    name: str


@dataclass(frozen=True)
class BlockEnd(Instruction):
    pass


@dataclass(frozen=True)
class Malformed(Instruction):
    pass
