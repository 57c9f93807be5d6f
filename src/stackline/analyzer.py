"""
Static analysis for stackline programs
======================================

Performs a single forward pass over the program **before** execution.  The
analyzer never touches memory: it only builds the two tables the executor
needs and collects diagnostics.

Usage::

    from stackline.analyzer import Analyzer
    result = Analyzer().analyze(source)
    result.symbols      # {"a": 0, ...}   global name -> address
    result.functions    # {"f": 1, ...}   function name -> header line
    for d in result.diagnostics:
        print(d)

Diagnostics never halt the pass; every line is visited.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Union

from .errors import Diagnostic, DiagnosticKind
from .instructions import Instruction
from .lexer import decode_program

logger = logging.getLogger("stackline.analyzer")


@dataclass
class AnalysisResult:
    symbols: Dict[str, int] = field(default_factory=dict)
    functions: Dict[str, int] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class Analyzer:
    """Build the global symbol table and function table for a program."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.symbols: Dict[str, int] = {}
        self.functions: Dict[str, int] = {}
        self.diagnostics: List[Diagnostic] = []
        self._locals: Set[str] = set()
        self._inside_function = False
        self._next_address = 0

    # -- public API ---------------------------------------------------------

    def analyze(self, program: Union[str, Sequence[Instruction]]) -> AnalysisResult:
        """Run the analyzer on *program* (source text or decoded lines)."""
        if isinstance(program, str):
            program = decode_program(program)
        self._reset()
        logger.info("analyzing %d line(s)", len(program))

        for instr in program:
            handler = getattr(self, f"_check_{type(instr).__name__}", None)
            if handler:
                handler(instr)

        if self._inside_function:
            last = program[-1].line if program else 0
            self._report(DiagnosticKind.UNBALANCED_BLOCK, "function body never closed", last)

        logger.info(
            "analysis done: %d global(s), %d function(s), %d diagnostic(s)",
            len(self.symbols), len(self.functions), len(self.diagnostics),
        )
        return AnalysisResult(dict(self.symbols), dict(self.functions), list(self.diagnostics))

    # -- helpers ------------------------------------------------------------

    def _report(self, kind: DiagnosticKind, subject: str, line: int) -> None:
        diagnostic = Diagnostic(kind, subject, line)
        logger.debug("diagnostic: %s", diagnostic)
        self.diagnostics.append(diagnostic)

    def _is_known_variable(self, name: str) -> bool:
        return name in self._locals or name in self.symbols

    # -- line visitors ------------------------------------------------------

    def _check_Declare(self, instr) -> None:
        name = instr.name
        if self._inside_function:
            if name in self._locals or name in self.symbols:
                self._report(DiagnosticKind.VARIABLE_REDEFINED, name, instr.line)
            else:
                self._locals.add(name)
            return

        if name in self.symbols:
            self._report(DiagnosticKind.VARIABLE_REDEFINED, name, instr.line)
        else:
            self.symbols[name] = self._next_address
            self._next_address += 1

    def _check_Assign(self, instr) -> None:
        # the literal itself is only parsed at execution time
        if not self._is_known_variable(instr.name):
            self._report(DiagnosticKind.VARIABLE_UNKNOWN, instr.name, instr.line)

    def _check_FuncDecl(self, instr) -> None:
        if self._inside_function:
            self._report(DiagnosticKind.UNBALANCED_BLOCK, f"{instr.name}()", instr.line)
            self._locals.clear()

        if instr.name in self.functions:
            self._report(DiagnosticKind.FUNCTION_REDEFINED, instr.name, instr.line)
        else:
            self.functions[instr.name] = instr.line
        self._inside_function = True

    def _check_BlockEnd(self, instr) -> None:
        if not self._inside_function:
            self._report(DiagnosticKind.UNBALANCED_BLOCK, instr.text, instr.line)
        self._locals.clear()
        self._inside_function = False

    def _check_Call(self, instr) -> None:
        if instr.name not in self.functions:
            self._report(DiagnosticKind.FUNCTION_UNKNOWN, f"{instr.name}()", instr.line)

    def _check_Malformed(self, instr) -> None:
        self._report(DiagnosticKind.UNMATCHED_LINE, instr.text, instr.line)


def analyze(source: Union[str, Sequence[Instruction]]) -> AnalysisResult:
    return Analyzer().analyze(source)
