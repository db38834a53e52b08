"""
nox Lexer Package

Turns nox source text into tokens: bare words, quoted strings, numbers
and the one- and two-character operators, plus INDENT/DEDENT markers for
block structure.

Key Features:
- Backslash escapes inside words and strings
- Composite operators (==, <=, >=, !=) absorbed from a single lookahead
- Whole-input scanning with block markers, or line-at-a-time scanning
- Source locations and diagnostics on every error

Author: nox maintainers
"""

from .tokens import Token, TokenType, SourceLocation, make_token
from .lexer import Lexer, IndentationTracker, parse_string, parse_file, scan_line
from .errors import (
    LexerError, NoTokensPresent, InconsistentWhitespace, UnexpectedEndOfLine,
    UnterminatedStringLiteral, InvalidCharacter
)

__all__ = [
    "Lexer",
    "IndentationTracker",
    "Token",
    "TokenType",
    "SourceLocation",
    "make_token",
    "parse_string",
    "parse_file",
    "scan_line",

    # Error handling
    "LexerError",
    "NoTokensPresent",
    "InconsistentWhitespace",
    "UnexpectedEndOfLine",
    "UnterminatedStringLiteral",
    "InvalidCharacter",
]
