"""
Per-line results.

A Line pairs the width of a line's leading indent with the tokens or
expressions found on it. LineFailure wraps whichever stage rejected it.
"""

from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Line(Generic[T]):
    """One logical line of input. Never empty."""
    leading_whitespace: int
    members: Tuple[T, ...]

    def __init__(self, leading_whitespace: int, members: Sequence[T]):
        if leading_whitespace < 0:
            raise ValueError("leading_whitespace cannot be negative")
        if not members:
            raise ValueError("a line must hold at least one member")
        object.__setattr__(self, "leading_whitespace", leading_whitespace)
        object.__setattr__(self, "members", tuple(members))

    def __str__(self) -> str:
        return " " * self.leading_whitespace + " ".join(str(member) for member in self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)


class LineFailure(Exception):
    """
    Raised when a line cannot be turned into expressions.

    `error` holds the scan or reduce error that stopped it.
    """

    def __init__(self, error: Exception):
        super().__init__(str(error))
        self.error = error

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.error}"


class TokenFailure(LineFailure):
    """The scanner rejected the line."""


class ExprFailure(LineFailure):
    """The reducer rejected the line's tokens."""
