"""
nox Reducer Package

Folds a line's tokens into expressions. Most tokens map to one
expression each; attributes and trait-tags are the multi-token idioms.

Author: nox maintainers
"""

from .expressions import (
    Expression, ExpressionType, Attribute, TraitTag, Int, Raw, Arithmetic,
    Relational, Colon, ArithmeticOperator, RelationalOperator, word_expression
)
from .reducer import Reducer, reduce_tokens, reduce_line
from .errors import ReduceError, InvalidToken, UnexpectedLastToken, NotSupported, NotYetImplemented

__all__ = [
    # Core reducer
    "Reducer", "reduce_tokens", "reduce_line",

    # Expressions
    "Expression", "ExpressionType",
    "Attribute", "TraitTag", "Int", "Raw", "Arithmetic", "Relational", "Colon",
    "ArithmeticOperator", "RelationalOperator", "word_expression",

    # Error handling
    "ReduceError", "InvalidToken", "UnexpectedLastToken", "NotSupported", "NotYetImplemented",
]
