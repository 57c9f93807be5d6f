# src/stackline/cli/main.py
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .. import __version__, interpret
from ..analyzer import Analyzer
from ..config import InterpreterConfig
from ..errors import StacklineError
from ..lexer import decode_program
from ..trace import EventKind

console = Console()

_EVENT_STYLES = {
    EventKind.DIAGNOSTIC: "bold red",
    EventKind.WRITE: "green",
    EventKind.CALL: "cyan",
    EventKind.RETURN: "cyan",
    EventKind.FRAME_CREATED: "yellow",
    EventKind.FRAME_DELETED: "yellow",
}


def _configure_logging(config):
    logging.basicConfig(
        level=config.logging_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _read(file):
    with open(file, 'r', encoding='utf-8') as f:
        return f.read()


def _mapping_table(title, mapping, key_header, value_header):
    table = Table(title=title)
    table.add_column(key_header, style="cyan")
    table.add_column(value_header, style="yellow")
    for key, value in sorted(mapping.items(), key=lambda item: item[1]):
        table.add_row(escape(key), str(value))
    return table


def _print_event(event):
    console.print(f"[{_EVENT_STYLES[event.kind]}]{escape(str(event))}[/]", highlight=False)


@click.group()
@click.version_option(version=__version__, prog_name="stackline")
def cli():
    """stackline - two-phase interpreter for a line-oriented toy language"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True))
@click.option('--strict/--no-strict', default=None, help="Fail on unbalanced blocks.")
@click.option('--log-level', default=None, help="Logging level (DEBUG, INFO, WARNING...).")
@click.option('--tables/--no-tables', 'show_tables', default=True, help="Print the analyzer tables.")
def run(file, strict, log_level, show_tables):
    """Analyze and run a program"""
    config = InterpreterConfig.from_env().with_overrides(
        strict=strict, log_level=log_level, show_tables=show_tables
    )
    _configure_logging(config)
    try:
        source = _read(file)
        report = interpret(source, config=config, listener=_print_event)
    except (StacklineError, OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    if config.show_tables:
        console.print(_mapping_table("Symbols", report.analysis.symbols, "Variable", "Address"))
        console.print(_mapping_table("Functions", report.analysis.functions, "Function", "Line"))

    result = report.execution
    console.print("execution ended\n")
    console.print(f"memory: {result.memory}", highlight=False)
    console.print(f"call_stack: {result.call_stack}", highlight=False)
    console.print(f"frames: {result.frames}", highlight=False)


@cli.command()
@click.argument('file', type=click.Path(exists=True))
def check(file):
    """Run static analysis only"""
    try:
        source = _read(file)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    result = Analyzer().analyze(source)
    if result.diagnostics:
        console.print("[bold red]Diagnostics:[/bold red]")
        for diagnostic in result.diagnostics:
            console.print(f"  {escape(str(diagnostic))}", highlight=False)
        sys.exit(1)
    console.print("[bold green]No diagnostics.[/bold green]")


@cli.command()
@click.argument('file', type=click.Path(exists=True))
def tokens(file):
    """Show the instruction decoded from each line"""
    try:
        source = _read(file)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title="Instructions")
    table.add_column("Line", style="yellow")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Text")

    for instr in decode_program(source):
        table.add_row(str(instr.line), type(instr).__name__, escape(getattr(instr, "name", "")), escape(instr.text))

    console.print(table)


if __name__ == "__main__":
    cli()
