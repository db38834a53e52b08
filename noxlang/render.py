"""
Text rendering for tokens, expressions and lines.

Rendering is the inverse of scanning up to whitespace and quoting: the
text written for a token stream scans back to an equal token stream.
"""

import io
from typing import Iterable, TextIO

from .lexer.tokens import Token, TokenType
from .lines import Line

DEFAULT_INDENT_UNIT = "    "


def render_tokens(tokens: Iterable[Token], writer: TextIO, indent_unit: str = DEFAULT_INDENT_UNIT):
    """
    Write the textual form of a token stream.

    Tokens on a line are separated by single spaces. INDENT and DEDENT
    end the current line; the next token starts a new line at the new depth.
    """
    depth = 0
    at_line_start = True
    pending_newline = False

    for token in tokens:
        if token.type == TokenType.INDENT:
            depth += 1
            pending_newline = True
            continue
        if token.type == TokenType.DEDENT:
            depth = max(depth - 1, 0)
            pending_newline = True
            continue

        if pending_newline:
            writer.write("\n" + indent_unit * depth)
            pending_newline = False
        elif not at_line_start:
            writer.write(" ")

        writer.write(str(token))
        at_line_start = False


def render_expressions(expressions: Iterable, writer: TextIO):
    """Write expressions separated by single spaces."""
    writer.write(" ".join(str(expression) for expression in expressions))


def render_line(line: Line, writer: TextIO):
    """Write a line: its leading whitespace, then its members."""
    writer.write(str(line))


def tokens_to_text(tokens: Iterable[Token], indent_unit: str = DEFAULT_INDENT_UNIT) -> str:
    """Render a token stream to a string."""
    buffer = io.StringIO()
    render_tokens(tokens, buffer, indent_unit)
    return buffer.getvalue()
