"""
Token definitions for the nox lexer.

This module defines every token type the scanner can produce:
- One-character operators ($ : . ! [ ] / * - + %)
- Operators that may absorb a following '=' (= < > !)
- Two-character composites (== <= >= !=)
- Literals (quoted strings, numbers) and bare identifiers
- Block-structuring indentation markers

Author: nox maintainers
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in nox.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Structural Tokens
    # ========================================================================
    INDENT = auto()                 # Indentation increase
    DEDENT = auto()                 # Indentation decrease

    # ========================================================================
    # Punctuation
    # ========================================================================
    DOLLAR = auto()                 # $ (introduces a trait-tag)
    COLON = auto()                  # : (end of tag)
    PERIOD = auto()                 # . (trait separator)
    BANG = auto()                   # ! (reserved)

    # ========================================================================
    # Arithmetic
    # ========================================================================
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    SLASH = auto()                  # /
    ASTERISK = auto()               # *
    MINUS = auto()                  # -
    PLUS = auto()                   # +
    MOD = auto()                    # %

    # ========================================================================
    # Relational
    # ========================================================================
    EQUALS_SIGN = auto()            # =
    LEFT_ANGLE = auto()             # <
    RIGHT_ANGLE = auto()            # >
    EQUAL_TO = auto()               # ==
    LESS_THAN_EQUAL = auto()        # <=
    GREATER_THAN_EQUAL = auto()     # >=
    NOT_EQUAL = auto()              # !=

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    STRING_LITERAL = auto()         # "hello", 'hello'
    IDENTIFIER = auto()             # rect, me(), _width
    NUMBER = auto()                 # 42, 0.5, 3.


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


UNKNOWN_LOCATION = SourceLocation("<unknown>", 0, 0, 0)


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the nox language.

    Two tokens are equal when their type and payload agree. The raw
    lexeme and the location are carried along for rendering and error
    reporting but take no part in comparisons.
    """
    type: TokenType
    lexeme: str = field(compare=False)              # Raw text from source
    value: Any = None                               # Payload (text, float or None)
    location: SourceLocation = field(default=UNKNOWN_LOCATION, compare=False)

    def __str__(self) -> str:
        if self.type == TokenType.STRING_LITERAL:
            escaped = self.value.replace('\\', '\\\\').replace('"', '\\"')
            return f'"{escaped}"'
        if self.type == TokenType.IDENTIFIER:
            return escape_word(self.value)
        if self.type in (TokenType.INDENT, TokenType.DEDENT):
            return ""
        return self.lexeme

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"

    @property
    def is_word(self) -> bool:
        """Check if this token can stand as a bare word (attribute value, argument)."""
        return self.type in WORD_TOKENS

    @property
    def is_structural(self) -> bool:
        """Check if this token is an indentation marker."""
        return self.type in (TokenType.INDENT, TokenType.DEDENT)


def make_token(token_type: TokenType, value: Any = None, lexeme: str = None,
               location: SourceLocation = UNKNOWN_LOCATION) -> Token:
    """
    Build a token without going through the scanner.

    The lexeme defaults to the canonical spelling of the token type, or to
    the textual form of the value for literals.
    """
    if lexeme is None:
        if token_type in TOKEN_SPELLINGS:
            lexeme = TOKEN_SPELLINGS[token_type]
        elif token_type == TokenType.NUMBER:
            lexeme = format_number(value)
        elif value is not None:
            lexeme = str(value)
        else:
            lexeme = ""
    return Token(token_type, lexeme, value, location)


def format_number(value: float) -> str:
    """Format a number payload the way it would be written in source."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def is_identifier_start(char: str) -> bool:
    """Check if character can start an identifier."""
    return char == '_' or char.isalpha()


def is_identifier_continue(char: str) -> bool:
    """Check if character can continue an identifier."""
    return char == '_' or char.isalnum() or char in CALL_CHARS


def escape_word(text: str) -> str:
    """
    Escape an identifier so that it re-scans as a single identifier.

    Characters that would otherwise end the word, and a leading digit
    (which would start a number), are prefixed with a backslash.
    """
    parts = []
    for index, char in enumerate(text):
        if index == 0:
            safe = is_identifier_start(char)
        else:
            safe = is_identifier_continue(char)
        parts.append(char if safe else '\\' + char)
    return ''.join(parts)


# Lookup tables for token recognition

# Parentheses belong to words: `me()` is a single selector identifier
CALL_CHARS = {'(', ')'}

SINGLE_CHAR_OPERATORS = {
    "$": TokenType.DOLLAR,
    ":": TokenType.COLON,
    ".": TokenType.PERIOD,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "/": TokenType.SLASH,
    "*": TokenType.ASTERISK,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "%": TokenType.MOD,
}

# Operators that become a composite when followed by '='
COMPOSABLE_OPERATORS = {
    "=": (TokenType.EQUALS_SIGN, TokenType.EQUAL_TO),
    "<": (TokenType.LEFT_ANGLE, TokenType.LESS_THAN_EQUAL),
    ">": (TokenType.RIGHT_ANGLE, TokenType.GREATER_THAN_EQUAL),
    "!": (TokenType.BANG, TokenType.NOT_EQUAL),
}

COMPOSITE_SUFFIX = "="
COMMENT_CHAR = "#"
ESCAPE_CHAR = "\\"
QUOTE_CHARS = {'"', "'"}

TOKEN_SPELLINGS = {token_type: text for text, token_type in SINGLE_CHAR_OPERATORS.items()}
TOKEN_SPELLINGS.update({
    single: text for text, (single, _) in COMPOSABLE_OPERATORS.items()
})
TOKEN_SPELLINGS.update({
    composite: text + COMPOSITE_SUFFIX for text, (_, composite) in COMPOSABLE_OPERATORS.items()
})

WORD_TOKENS = {
    TokenType.IDENTIFIER,
    TokenType.STRING_LITERAL,
    TokenType.NUMBER,
}
