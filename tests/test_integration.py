"""
End-to-end runs through `stackline.interpret`: analysis then execution,
checked against the full ordered trace.
"""

from pathlib import Path

import pytest

from stackline import interpret
from stackline.errors import DiagnosticKind
from stackline.trace import EventKind

_PROGRAMS = Path(__file__).resolve().parents[1] / "programs"

NESTED_CALLS = """var a
func f() {
    a = 5
    var b
    b = 6
}
func g() {
    var c
    c = 7
    f()
}
g()
"""


def test_nested_calls_scenario():
	report = interpret(NESTED_CALLS)

	assert report.analysis.symbols == {"a": 0}
	assert report.analysis.functions == {"f": 1, "g": 6}
	assert report.analysis.ok

	assert [str(e) for e in report.trace] == [
		"g() called in line 11",
		"frame created for g()",
		"c at address 1 receives 7",
		"f() called in line 9",
		"frame created for f()",
		"a at address 0 receives 5",
		"b at address 2 receives 6",
		"frame deleted for f() (1 cell(s) released)",
		"return to line 9",
		"frame deleted for g() (1 cell(s) released)",
		"return to line 11",
	]
	assert report.execution.memory == [5]
	assert report.execution.call_stack == []
	assert report.execution.frames == []
	assert report.execution.balanced


def test_nested_calls_program_file_matches_inline_source():
	assert (_PROGRAMS / "nested_calls.sl").read_text() == NESTED_CALLS


def test_memory_length_tracks_call_depth():
	lengths = []
	report = interpret(NESTED_CALLS, listener=lambda e: lengths.append((e.kind, e.cells)))
	deleted = [cells for kind, cells in lengths if kind is EventKind.FRAME_DELETED]
	assert deleted == [1, 1]
	assert len(report.execution.memory) == len(report.analysis.symbols)


@pytest.mark.parametrize("count", [1, 3, 10])
def test_top_level_only_programs(count):
	names = [f"v{i}" for i in range(count)]
	source = "\n".join(f"var {name}" for name in names)
	report = interpret(source)
	assert report.analysis.symbols == {name: i for i, name in enumerate(names)}
	assert len(report.execution.memory) == count


def test_diagnostics_come_first_then_execution_continues():
	source = "\n".join([
		"var a",
		"var a",
		"q = 1",
		"h()",
		"nonsense here",
		"a = 8",
	])
	report = interpret(source)
	kinds = [e.diagnostic.kind for e in report.trace if e.kind is EventKind.DIAGNOSTIC]
	assert kinds == [
		DiagnosticKind.VARIABLE_REDEFINED,
		DiagnosticKind.VARIABLE_UNKNOWN,
		DiagnosticKind.FUNCTION_UNKNOWN,
		DiagnosticKind.UNMATCHED_LINE,
	]
	assert report.trace[-1].kind is EventKind.WRITE
	assert report.execution.memory == [8]


def test_local_is_invisible_after_return():
	source = "\n".join([
		"func f() {",
		"var b",
		"b = 1",
		"}",
		"f()",
		"b = 2",
	])
	report = interpret(source)
	assert "b" not in report.analysis.symbols
	assert [d.kind for d in report.analysis.diagnostics] == [DiagnosticKind.VARIABLE_UNKNOWN]
	writes = [e for e in report.trace if e.kind is EventKind.WRITE]
	assert len(writes) == 1
	assert report.execution.memory == []


def test_declared_but_never_called_function_does_not_touch_memory():
	report = interpret("var a\nfunc f() {\na = 5\n}\n")
	assert report.execution.memory == [0]
	assert report.trace == []


def test_local_redeclaration_of_a_global_is_reported_and_writes_reach_the_global():
	report = interpret("var a\nfunc f() {\nvar a\na = 5\n}\nf()\n")
	assert [d.kind for d in report.analysis.diagnostics] == [DiagnosticKind.VARIABLE_REDEFINED]
	assert report.execution.memory == [5]
