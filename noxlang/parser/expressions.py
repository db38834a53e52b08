"""
Expression definitions for nox.

Expressions are what the reducer makes of a line's tokens: single tokens
passed through with a little interpretation (numbers, operators), plus
the two idioms that span several tokens:

- Attribute:  key="value"
- TraitTag:   src.trait, $src.trait, $src<arg>.trait

Each expression is a small frozen dataclass; `Expression` is the union of
them and `kind` tells them apart without isinstance chains.

Author: nox maintainers
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

U16_MAX = 0xFFFF

# ASCII digits with an optional leading plus, as an unsigned integer is spelled
U16_PATTERN = re.compile(r"\+?[0-9]+")


class ExpressionType(Enum):
    """Enumeration of all expression kinds."""
    ATTRIBUTE = "Attribute"
    TRAIT_TAG = "TraitTag"
    INT = "Int"
    RAW = "Raw"
    ARITHMETIC = "Arithmetic"
    RELATIONAL = "Relational"
    COLON = "Colon"


class ArithmeticOperator(Enum):
    """Basic math operators, valued by their nox spelling."""
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    DIV = "/"
    MULT = "*"
    SUB = "-"
    ADD = "+"
    MOD = "%"

    def __str__(self) -> str:
        return self.value


class RelationalOperator(Enum):
    """Comparison operators, valued by their nox spelling."""
    EQUAL_TO = "=="
    GREATER_THAN = ">"
    GREATER_THAN_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_EQUAL = "<="
    NOT_EQUAL = "!="

    @property
    def abbr(self) -> str:
        """Abbreviation used as the operator's tag name."""
        return RELATIONAL_ABBREVIATIONS[self]

    def __str__(self) -> str:
        return self.value


RELATIONAL_ABBREVIATIONS = {
    RelationalOperator.EQUAL_TO: "et",
    RelationalOperator.GREATER_THAN: "gt",
    RelationalOperator.GREATER_THAN_EQUAL: "gte",
    RelationalOperator.LESS_THAN: "lt",
    RelationalOperator.LESS_THAN_EQUAL: "lte",
    RelationalOperator.NOT_EQUAL: "ne",
}


# ============================================================================
# Idioms
# ============================================================================

@dataclass(frozen=True)
class Attribute:
    """A `key="value"` phrase."""
    key: str
    val: str

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.ATTRIBUTE

    def __str__(self) -> str:
        escaped = self.val.replace('\\', '\\\\').replace('"', '\\"')
        return f'{self.key}="{escaped}"'


@dataclass(frozen=True)
class TraitTag:
    """
    A trait of an object or selector.

    `selector` records the leading `$`; it is always set when an argument
    is present, since only the selector form takes one.
    """
    src: str
    arg: Optional[str]
    trait: str
    selector: bool = False

    def __post_init__(self):
        if self.arg is not None and not self.selector:
            object.__setattr__(self, "selector", True)

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.TRAIT_TAG

    def __str__(self) -> str:
        if self.arg is not None:
            return f"${self.src}<{self.arg}>.{self.trait}"
        if self.selector:
            return f"${self.src}.{self.trait}"
        return f"{self.src}.{self.trait}"


# ============================================================================
# Singletons
# ============================================================================

@dataclass(frozen=True)
class Int:
    """A bare word that reads as an unsigned 16-bit integer."""
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= U16_MAX:
            raise ValueError(f"Int expressions hold 0..{U16_MAX}, got {self.value}")

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.INT

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Raw:
    """Text that could not be read as anything more specific."""
    text: str

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.RAW

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Arithmetic:
    op: ArithmeticOperator

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.ARITHMETIC

    def __str__(self) -> str:
        return str(self.op)


@dataclass(frozen=True)
class Relational:
    op: RelationalOperator

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.RELATIONAL

    def __str__(self) -> str:
        return str(self.op)


@dataclass(frozen=True)
class Colon:
    """End-of-tag marker."""

    @property
    def kind(self) -> ExpressionType:
        return ExpressionType.COLON

    def __str__(self) -> str:
        return ":"


Expression = Union[Attribute, TraitTag, Int, Raw, Arithmetic, Relational, Colon]


def parse_u16(text: str) -> Optional[int]:
    """Return the value of `text` as an unsigned 16-bit integer, or None."""
    text = text.strip()
    if not U16_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value > U16_MAX:
        return None
    return value


def word_expression(text: str) -> Union[Int, Raw]:
    """Interpret a bare word: a small integer becomes Int, anything else Raw."""
    value = parse_u16(text)
    if value is None:
        return Raw(text)
    return Int(value)
