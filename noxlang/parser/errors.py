"""
Error handling for the nox reducer.

Every reduce error points at the token it tripped over and carries a
Diagnostic built from that token's location.

Author: nox maintainers
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ReduceError(Exception):
    """
    Exception raised when a token sequence does not form valid expressions.

    `str()` gives `Name: message`.
    """

    code = "R000"

    def __init__(
        self,
        message: str,
        token: Token,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location,
            severity="error",
            code=self.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"


class InvalidToken(ReduceError):
    """A token showed up where the idiom needed something else."""

    code = "R001"

    def __init__(self, token: Token, expected: str, suggestions: Optional[List[str]] = None):
        super().__init__(f"'{token}' ({expected})", token, help_text=expected, suggestions=suggestions)
        self.expected = expected


class UnexpectedLastToken(ReduceError):
    """The line ended in the middle of an idiom; `token` is the last one read."""

    code = "R002"

    def __init__(self, token: Token, expected: str, suggestions: Optional[List[str]] = None):
        super().__init__(f"line ends at '{token}' ({expected})", token, help_text=expected,
                         suggestions=suggestions)
        self.expected = expected


class NotSupported(ReduceError):
    """The token has no expression form."""

    code = "R003"

    def __init__(self, token: Token):
        super().__init__(f"{token.type.name} cannot be reduced to an expression", token)


class NotYetImplemented(ReduceError):
    """The token is reserved for syntax that does not exist yet."""

    code = "R004"

    def __init__(self, token: Token):
        super().__init__(f"'{token}' is reserved and not yet implemented", token)


# Common reducer error codes for categorization
REDUCER_ERROR_CODES = {
    InvalidToken.code: "Invalid token",
    UnexpectedLastToken.code: "Unexpected last token",
    NotSupported.code: "Token not supported",
    NotYetImplemented.code: "Token not yet implemented",
}


# Helper functions for creating common reducer errors

def create_invalid_token_error(found: Token, expected: str) -> InvalidToken:
    """Create an error for a token that does not fit the idiom being read."""
    suggestions = None
    if found.is_word and found.type != TokenType.IDENTIFIER:
        suggestions = [f"Write {found.lexeme} as a bare word, escaping special characters with '\\'"]
    return InvalidToken(found, expected, suggestions=suggestions)


def create_unexpected_end_error(last: Token, expected: str) -> UnexpectedLastToken:
    """Create an error for a line that stops in the middle of an idiom."""
    return UnexpectedLastToken(last, expected, suggestions=[f"Finish the line: {expected}"])
