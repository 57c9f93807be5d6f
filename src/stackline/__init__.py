"""
stackline - a two-phase interpreter for a line-oriented toy language.

The analyzer resolves globals and functions in one forward pass; the executor
then runs the same lines with a call stack, activation frames and one flat
memory store.

    >>> from stackline import interpret
    >>> report = interpret("var a\\na = 5\\n")
    >>> report.execution.memory
    [5]
"""

from dataclasses import dataclass
from typing import List, Optional

from .analyzer import Analyzer, AnalysisResult, analyze
from .config import InterpreterConfig
from .errors import (
    Diagnostic, DiagnosticKind,
    StacklineError, MemoryFault, BoundsViolation, UnbalancedBlockError,
)
from .executor import ActivationFrame, ExecutionContext, ExecutionResult, Executor, execute
from .lexer import classify_line, decode_program, tokenize_line
from .memory import Memory
from .trace import EventKind, Listener, Trace, TraceEvent

__version__ = "0.1.0"


@dataclass
class RunReport:
    analysis: AnalysisResult
    execution: ExecutionResult

    @property
    def trace(self) -> List[TraceEvent]:
        return self.execution.trace


def interpret(
    source: str,
    config: Optional[InterpreterConfig] = None,
    listener: Optional[Listener] = None,
) -> RunReport:
    """Analyze then execute *source*, recording one ordered trace."""
    program = decode_program(source)
    analysis = Analyzer().analyze(program)

    trace = Trace(listener)
    for diagnostic in analysis.diagnostics:
        trace.diagnostic(diagnostic)

    executor = Executor(program, analysis.symbols, analysis.functions, config=config, trace=trace)
    return RunReport(analysis, executor.run())


__all__ = [
    'interpret', 'RunReport',
    'Analyzer', 'AnalysisResult', 'analyze',
    'Executor', 'ExecutionContext', 'ExecutionResult', 'ActivationFrame', 'execute',
    'InterpreterConfig',
    'Diagnostic', 'DiagnosticKind',
    'StacklineError', 'MemoryFault', 'BoundsViolation', 'UnbalancedBlockError',
    'classify_line', 'decode_program', 'tokenize_line',
    'Memory',
    'EventKind', 'Listener', 'Trace', 'TraceEvent',
]
