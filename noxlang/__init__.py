"""
nox Language Front End

Scanner and reducer for the nox markup language: source text becomes
tokens, and each line's tokens become expressions (attributes,
trait-tags, integers, operators and raw words).

Architecture:
    noxlang/
    ├── lexer/           # Tokens, scanner and scan errors
    ├── parser/          # Expressions, reducer and reduce errors
    ├── lines.py         # Per-line results
    ├── extract.py       # Line-at-a-time scan + reduce
    ├── render.py        # Text output for tokens and expressions
    └── cli.py           # noxc command line

Author: nox maintainers
License: MIT
"""

import logging

__version__ = "0.1.0"
__author__ = "nox maintainers"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import NoxConfiguration
from .lexer import Lexer, Token, TokenType, SourceLocation, LexerError, parse_string, parse_file, scan_line
from .parser import Reducer, ReduceError, reduce_tokens, reduce_line
from .lines import Line, LineFailure, TokenFailure, ExprFailure
from .extract import extract_line, extract_lines
from .render import render_tokens, render_expressions, render_line, tokens_to_text

__all__ = [
    # Core classes
    "Lexer",
    "Reducer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Line",
    "NoxConfiguration",

    # Entry points
    "parse_string",
    "parse_file",
    "scan_line",
    "reduce_tokens",
    "reduce_line",
    "extract_line",
    "extract_lines",
    "render_tokens",
    "render_expressions",
    "render_line",
    "tokens_to_text",

    # Errors
    "LexerError",
    "ReduceError",
    "LineFailure",
    "TokenFailure",
    "ExprFailure",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
