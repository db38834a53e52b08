"""
Error handling for the nox lexer.

Provides error reporting with source location information and
suggestions for the look-alike characters people paste into .nox files.

Author: nox maintainers
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the scanner cannot turn its input into tokens.

    Subclasses name the failure; `str()` gives `Name: message`, or just
    `Name` for failures that carry no parameters.
    """

    code = "L000"
    has_parameters = True

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=self.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if not self.has_parameters:
            return self.name
        return f"{self.name}: {self.message}"


class NoTokensPresent(LexerError):
    """The input held only whitespace and comments. Callers skip the line."""

    code = "L001"
    has_parameters = False

    def __init__(self, location: SourceLocation):
        super().__init__("no tokens present", location)


class InconsistentWhitespace(LexerError):
    """Leading indentation mixes characters or breaks the inferred step."""

    code = "L002"
    has_parameters = False


class UnexpectedEndOfLine(LexerError):
    """A construct needed more input than there was."""

    code = "L003"

    def __init__(self, expected: str, location: SourceLocation, help_text: Optional[str] = None):
        super().__init__(expected, location, help_text=help_text)
        self.expected = expected


class UnterminatedStringLiteral(LexerError):
    """End of input was reached before the closing quote."""

    code = "L004"

    def __init__(self, partial: str, location: SourceLocation, help_text: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(partial, location, help_text=help_text, suggestions=suggestions)
        self.partial = partial


class InvalidCharacter(LexerError):
    """No scanning rule matched the character."""

    code = "L005"

    def __init__(self, char: str, location: SourceLocation, help_text: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(char, location, help_text=help_text, suggestions=suggestions)
        self.char = char


class ErrorRecovery:
    """
    Utilities for suggesting fixes to scan errors.
    """

    @staticmethod
    def suggest_ascii_alternatives(char: str) -> List[str]:
        """Suggest the nox spelling for characters commonly typed by mistake."""
        ascii_alternatives = {
            '≠': ['!='],
            '≤': ['<='],
            '≥': ['>='],
            '×': ['*'],
            '÷': ['/'],
            '−': ['-'],
            '“': ['"'],
            '”': ['"'],
            '‘': ["'"],
            '’': ["'"],
            '{': ['['],
            '}': [']'],
            '(': ['['],
            ')': [']'],
            ';': [':'],
            ',': [' '],
        }

        return ascii_alternatives.get(char, [])


# Common error codes for categorization
ERROR_CODES = {
    NoTokensPresent.code: "No tokens present",
    InconsistentWhitespace.code: "Inconsistent leading whitespace",
    UnexpectedEndOfLine.code: "Unexpected end of line",
    UnterminatedStringLiteral.code: "Unterminated string literal",
    InvalidCharacter.code: "Invalid character",
}


# Helper functions for creating common errors
def create_invalid_character_error(char: str, location: SourceLocation) -> InvalidCharacter:
    """Create an error for an invalid character."""
    suggestions = ErrorRecovery.suggest_ascii_alternatives(char)

    if suggestions:
        help_text = f"Did you mean {' or '.join(repr(s) for s in suggestions)}?"
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in nox source."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return InvalidCharacter(char, location, help_text=help_text, suggestions=suggestions)


def create_unterminated_string_error(quote: str, partial: str,
                                     location: SourceLocation) -> UnterminatedStringLiteral:
    """Create an error for an unterminated string literal."""
    return UnterminatedStringLiteral(
        partial,
        location,
        help_text=f"String literals must be closed with a matching {quote} quote.",
        suggestions=[f"Add a closing {quote} quote", "Check for unescaped quotes in the string"]
    )


def create_dangling_escape_error(location: SourceLocation) -> UnexpectedEndOfLine:
    """Create an error for a backslash with nothing after it."""
    return UnexpectedEndOfLine(
        "char after backslash",
        location,
        help_text="A backslash escapes the next character; write '\\\\' for a literal backslash."
    )


def create_mixed_indent_error(location: SourceLocation) -> InconsistentWhitespace:
    """Create an error for indentation that mixes tabs and spaces."""
    return InconsistentWhitespace(
        "inconsistent leading whitespace characters",
        location,
        help_text="Indent with either tabs or spaces throughout the file.",
    )


def create_indent_step_error(width: int, step: int, location: SourceLocation) -> InconsistentWhitespace:
    """Create an error for indentation that is not a multiple of the inferred step."""
    return InconsistentWhitespace(
        "inconsistent leading whitespace count",
        location,
        help_text=f"Indentation of {width} is not a multiple of the first indent ({step}).",
    )
