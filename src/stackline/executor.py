"""
Executor: walks the program counter over decoded lines.

State lives in an explicit ``ExecutionContext`` owned by one ``Executor`` for
the duration of a run:

* ``pc``: index of the line about to execute
* ``memory``: flat cell store, sized to the global table at start
* ``call_stack``: return points (the caller's line index), one per live call
* ``frames``: activation frames, pushed and popped with ``call_stack``

Function bodies only run through a call.  A ``func`` header reached by
straight-line flow is skipped up to its closing ``}``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .config import InterpreterConfig
from .errors import Diagnostic, DiagnosticKind, UnbalancedBlockError
from .instructions import BlockEnd, Instruction
from .lexer import decode_program
from .memory import Memory
from .trace import Listener, Trace, TraceEvent

logger = logging.getLogger("stackline.executor")


@dataclass
class ActivationFrame:
    function: str
    slots: Dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.slots)


@dataclass
class ExecutionContext:
    memory: Memory
    pc: int = 0
    call_stack: List[int] = field(default_factory=list)
    frames: List[ActivationFrame] = field(default_factory=list)

    @property
    def current_frame(self) -> Optional[ActivationFrame]:
        return self.frames[-1] if self.frames else None

    @property
    def depth(self) -> int:
        return len(self.call_stack)

    def resolve(self, name: str, symbols: Mapping[str, int]) -> Optional[int]:
        """Address of *name*: the current frame first, then the globals."""
        frame = self.current_frame
        if frame is not None and name in frame.slots:
            return frame.slots[name]
        return symbols.get(name)


@dataclass
class ExecutionResult:
    memory: List[int]
    call_stack: List[int]
    frames: List[Dict[str, int]]
    trace: List[TraceEvent]

    @property
    def balanced(self) -> bool:
        return not self.call_stack and not self.frames


class Executor:
    """Run a decoded program against the analyzer's tables."""

    def __init__(
        self,
        program: Union[str, Sequence[Instruction]],
        symbols: Mapping[str, int],
        functions: Mapping[str, int],
        config: Optional[InterpreterConfig] = None,
        trace: Optional[Trace] = None,
        listener: Optional[Listener] = None,
    ):
        if isinstance(program, str):
            program = decode_program(program)
        self.program: List[Instruction] = list(program)
        self.symbols = dict(symbols)
        self.functions = dict(functions)
        self.config = config or InterpreterConfig()
        self.trace = trace if trace is not None else Trace(listener)
        self.ctx = ExecutionContext(Memory(len(self.symbols)))
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    # -- public API ---------------------------------------------------------

    def step(self) -> bool:
        """Execute the line at ``pc``; return False once execution has ended."""
        if self._finished:
            return False
        if self.ctx.pc >= len(self.program):
            self._finish()
            return False

        instr = self.program[self.ctx.pc]
        handler = getattr(self, f"_exec_{type(instr).__name__}", None)
        next_pc = handler(instr) if handler else None
        self.ctx.pc = self.ctx.pc + 1 if next_pc is None else next_pc
        return True

    def run(self) -> ExecutionResult:
        logger.info("executing %d line(s) with %d global cell(s)", len(self.program), len(self.ctx.memory))
        while self.step():
            pass
        return self.result()

    def result(self) -> ExecutionResult:
        return ExecutionResult(
            memory=self.ctx.memory.snapshot(),
            call_stack=list(self.ctx.call_stack),
            frames=[dict(frame.slots) for frame in self.ctx.frames],
            trace=list(self.trace.events),
        )

    # -- helpers ------------------------------------------------------------

    def _unbalanced(self, subject: str, line: int) -> None:
        diagnostic = Diagnostic(DiagnosticKind.UNBALANCED_BLOCK, subject, line)
        if self.config.strict:
            raise UnbalancedBlockError(diagnostic)
        logger.warning("%s", diagnostic)
        self.trace.diagnostic(diagnostic)

    def _finish(self) -> None:
        self._finished = True
        for frame, return_line in zip(reversed(self.ctx.frames), reversed(self.ctx.call_stack)):
            self._unbalanced(f"{frame.function}() never returned", return_line)
        logger.info("execution ended: memory=%s call_stack=%s", self.ctx.memory.snapshot(), self.ctx.call_stack)

    # -- line handlers ------------------------------------------------------
    # Each returns the next pc, or None to fall through to the next line.

    def _exec_Declare(self, instr):
        frame = self.ctx.current_frame
        if frame is None:
            # globals were laid out by the analyzer
            return None
        if instr.name in frame.slots:
            logger.debug("line %d: %s already bound in %s()", instr.line, instr.name, frame.function)
            return None
        if instr.name in self.symbols:
            logger.debug("line %d: %s is a global, not rebound", instr.line, instr.name)
            return None
        frame.slots[instr.name] = self.ctx.memory.allocate()
        return None

    def _exec_Assign(self, instr):
        address = self.ctx.resolve(instr.name, self.symbols)
        if address is None:
            logger.debug("line %d: %s is not bound, skipped", instr.line, instr.name)
            return None
        value = instr.value
        if value is None:
            logger.debug("line %d: bad literal %r, skipped", instr.line, instr.literal)
            return None
        self.ctx.memory[address] = value
        self.trace.write(instr.line, instr.name, address, value)
        return None

    def _exec_FuncDecl(self, instr):
        pc = self.ctx.pc + 1
        while pc < len(self.program) and not isinstance(self.program[pc], BlockEnd):
            pc += 1
        return pc + 1

    def _exec_Call(self, instr):
        target = self.functions.get(instr.name)
        if target is None:
            logger.debug("line %d: unknown function %s(), skipped", instr.line, instr.name)
            return None
        self.trace.call(instr.line, instr.name)
        self.ctx.call_stack.append(self.ctx.pc)
        self.ctx.frames.append(ActivationFrame(instr.name))
        self.trace.frame_created(instr.line, instr.name)
        return target + 1

    def _exec_BlockEnd(self, instr):
        if not self.ctx.call_stack:
            self._unbalanced(instr.text, instr.line)
            return None
        frame = self.ctx.frames.pop()
        self.ctx.memory.release(len(frame))
        self.trace.frame_deleted(instr.line, frame.function, len(frame))
        return_line = self.ctx.call_stack.pop()
        self.trace.ret(instr.line, return_line)
        return return_line + 1


def execute(program, symbols, functions, config=None, listener=None) -> ExecutionResult:
    return Executor(program, symbols, functions, config=config, listener=listener).run()
