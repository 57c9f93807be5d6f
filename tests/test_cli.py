"""CLI tests driven through click's CliRunner."""

import pytest
from click.testing import CliRunner

from stackline.cli.main import cli
from test_integration import NESTED_CALLS


@pytest.fixture
def program(tmp_path):
	def _write(source, name="prog.sl"):
		path = tmp_path / name
		path.write_text(source)
		return str(path)
	return _write


def test_run_prints_trace_and_final_state(program):
	result = CliRunner().invoke(cli, ["run", "--no-tables", program(NESTED_CALLS)])
	assert result.exit_code == 0, result.output
	assert "g() called in line 11" in result.output
	assert "b at address 2 receives 6" in result.output
	assert "memory: [5]" in result.output
	assert "call_stack: []" in result.output
	assert "frames: []" in result.output


def test_run_shows_tables_by_default(program):
	result = CliRunner().invoke(cli, ["run", program(NESTED_CALLS)])
	assert result.exit_code == 0, result.output
	assert "Symbols" in result.output
	assert "Functions" in result.output


def test_run_strict_fails_on_stray_block_end(program):
	result = CliRunner().invoke(cli, ["run", "--strict", program("var a\n}\n")])
	assert result.exit_code == 1
	assert "unbalanced block" in result.output


def test_run_lenient_reports_stray_block_end(program):
	result = CliRunner().invoke(cli, ["run", "--no-strict", "--no-tables", program("var a\n}\n")])
	assert result.exit_code == 0, result.output
	assert "unbalanced block: } (line 1)" in result.output


def test_check_clean_program(program):
	result = CliRunner().invoke(cli, ["check", program(NESTED_CALLS)])
	assert result.exit_code == 0
	assert "No diagnostics" in result.output


def test_check_reports_diagnostics(program):
	result = CliRunner().invoke(cli, ["check", program("x = 1\nf()\n")])
	assert result.exit_code == 1
	assert "variable unknown: x (line 0)" in result.output
	assert "function unknown: f() (line 1)" in result.output


def test_tokens_lists_instruction_kinds(program):
	result = CliRunner().invoke(cli, ["tokens", program("var a\nf()\n")])
	assert result.exit_code == 0, result.output
	assert "Declare" in result.output
	assert "Call" in result.output


def test_missing_file_is_a_usage_error():
	result = CliRunner().invoke(cli, ["run", "does-not-exist.sl"])
	assert result.exit_code == 2


def test_version():
	result = CliRunner().invoke(cli, ["--version"])
	assert result.exit_code == 0
	assert "0.1.0" in result.output


@pytest.mark.parametrize("command", ["run", "check", "tokens"])
def test_undecodable_source_is_reported(tmp_path, command):
	path = tmp_path / "latin.sl"
	path.write_bytes(b"\xff\xfe = 1\n")
	result = CliRunner().invoke(cli, [command, str(path)])
	assert result.exit_code == 1
	assert not isinstance(result.exception, UnicodeDecodeError)
	assert "Error:" in result.output
