# lexer.py
"""Whitespace tokenization and per-line instruction classification.

The language has one instruction per line, so there is no token stream to
manage: a line is split into words and its shape decides the variant.
"""

from typing import List

from .instructions import (
    Instruction, Blank, Declare, Assign, FuncDecl, Call, BlockEnd, Malformed,
)

VAR = "var"
FUNC = "func"
ASSIGN = "="
LBRACE = "{"
RBRACE = "}"
CALL_SUFFIX = "()"


def tokenize_line(text: str) -> List[str]:
    return text.split()


def _strip_call_suffix(name: str) -> str:
    if name.endswith(CALL_SUFFIX):
        return name[:-len(CALL_SUFFIX)]
    return name


def classify_line(text: str, line: int) -> Instruction:
    """Classify one source line into its instruction variant."""
    text = text.strip()
    tokens = tokenize_line(text)

    if not tokens:
        return Blank(line, text)

    if len(tokens) == 2 and tokens[0] == VAR:
        return Declare(line, text, tokens[1])

    if len(tokens) == 3 and tokens[1] == ASSIGN:
        return Assign(line, text, tokens[0], tokens[2])

    if len(tokens) == 3 and tokens[0] == FUNC and tokens[2] == LBRACE:
        # `func f() {` and `func f {` both declare `f`
        name = _strip_call_suffix(tokens[1])
        if name:
            return FuncDecl(line, text, name)
        return Malformed(line, text)

    if tokens == [RBRACE]:
        return BlockEnd(line, text)

    if len(tokens) == 1 and tokens[0].endswith(CALL_SUFFIX):
        name = _strip_call_suffix(tokens[0])
        if name:
            return Call(line, text, name)

    return Malformed(line, text)


def decode_program(source: str) -> List[Instruction]:
    """Return one instruction per source line, in source order."""
    return [classify_line(text, index) for index, text in enumerate(source.splitlines())]
