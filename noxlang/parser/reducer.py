"""
nox Reducer Implementation

Folds a token stream into expressions. Only two idioms span more than
one token, so this is a single left-to-right pass with one token of
lookahead and no backtracking:

    IDENT '=' WORD                          -> Attribute
    IDENT '.' IDENT                         -> TraitTag
    '$' IDENT ('<' WORD? '>')? '.' IDENT    -> TraitTag (selector form)

Every other token maps to a single expression on its own.

Author: nox maintainers
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..lexer.tokens import Token, TokenType, WORD_TOKENS
from ..lines import Line
from .expressions import (
    Expression, Attribute, TraitTag, Raw, Arithmetic, Relational, Colon,
    ArithmeticOperator, RelationalOperator, word_expression
)
from .errors import (
    ReduceError, NotSupported, NotYetImplemented, InvalidToken,
    create_invalid_token_error, create_unexpected_end_error
)

logger = logging.getLogger(__name__)


ARITHMETIC_OPERATORS = {
    TokenType.LEFT_BRACKET: ArithmeticOperator.OPEN_BRACKET,
    TokenType.RIGHT_BRACKET: ArithmeticOperator.CLOSE_BRACKET,
    TokenType.SLASH: ArithmeticOperator.DIV,
    TokenType.ASTERISK: ArithmeticOperator.MULT,
    TokenType.MINUS: ArithmeticOperator.SUB,
    TokenType.PLUS: ArithmeticOperator.ADD,
    TokenType.MOD: ArithmeticOperator.MOD,
}

RELATIONAL_OPERATORS = {
    TokenType.EQUAL_TO: RelationalOperator.EQUAL_TO,
    TokenType.LESS_THAN_EQUAL: RelationalOperator.LESS_THAN_EQUAL,
    TokenType.GREATER_THAN_EQUAL: RelationalOperator.GREATER_THAN_EQUAL,
    TokenType.NOT_EQUAL: RelationalOperator.NOT_EQUAL,
    # Lone angle brackets only get here when they are not part of a selector
    TokenType.LEFT_ANGLE: RelationalOperator.LESS_THAN,
    TokenType.RIGHT_ANGLE: RelationalOperator.GREATER_THAN,
}

NAME_TOKENS = {TokenType.IDENTIFIER}


class Reducer:
    """
    nox token reducer.

    Consumes a list of tokens and produces the matching expressions.
    Stops at the first error; there is no resynchronization.
    """

    def __init__(self, tokens: Iterable[Token]):
        """
        Initialize reducer with tokens.

        Args:
            tokens: Tokens from the lexer (one line, or a whole input
                without indentation markers)
        """
        self.tokens: List[Token] = list(tokens)
        self.current = 0

        self._init_reduction_table()

    def _init_reduction_table(self):
        """Map every token type to the function that reduces a token of that type."""
        self.reducers: Dict[TokenType, Callable[[Token], Expression]] = {
            TokenType.IDENTIFIER: self._reduce_identifier,
            TokenType.STRING_LITERAL: self._reduce_string_literal,
            TokenType.NUMBER: self._reduce_number,
            TokenType.DOLLAR: self._reduce_selector_trait,
            TokenType.COLON: self._reduce_colon,

            TokenType.BANG: self._reject_reserved,
            TokenType.EQUALS_SIGN: self._reject_expression_start,
            TokenType.PERIOD: self._reject_expression_start,
            TokenType.INDENT: self._reject_unsupported,
            TokenType.DEDENT: self._reject_unsupported,
        }

        for token_type in ARITHMETIC_OPERATORS:
            self.reducers[token_type] = self._reduce_arithmetic
        for token_type in RELATIONAL_OPERATORS:
            self.reducers[token_type] = self._reduce_relational

    def reduce(self) -> List[Expression]:
        """
        Reduce the token stream to expressions.

        Raises:
            ReduceError: If the tokens do not form valid expressions
        """
        self.current = 0
        expressions: List[Expression] = []

        while not self._is_at_end():
            token = self._advance()
            expression = self.reducers[token.type](token)
            logger.debug("Pushing expression: %r", expression)
            expressions.append(expression)

        return expressions

    # ========================================================================
    # Idioms
    # ========================================================================

    def _reduce_identifier(self, token: Token) -> Expression:
        """Reduce an identifier, folding it into an attribute or trait-tag if one follows."""
        if self._match(TokenType.EQUALS_SIGN):
            return self._finish_attribute(token)
        if self._match(TokenType.PERIOD):
            return self._finish_trait(token)

        # Not an idiom: the identifier stands alone and the next token
        # is reduced on its own
        return word_expression(token.value)

    def _finish_attribute(self, key: Token) -> Attribute:
        value = self._consume(WORD_TOKENS, "expected token after attribute operator",
                              "expected string after equals sign")
        return Attribute(key.value, self._word_text(value))

    def _finish_trait(self, src: Token) -> TraitTag:
        trait = self._consume(NAME_TOKENS, "expected token after period", "expected string")
        return TraitTag(src.value, None, trait.value)

    def _reduce_selector_trait(self, dollar: Token) -> TraitTag:
        """Reduce `$src.trait` or `$src<arg>.trait`; the argument may be empty."""
        src = self._consume(NAME_TOKENS, "expected string")

        arg: Optional[str] = None
        if self._match(TokenType.LEFT_ANGLE):
            if self._match(TokenType.RIGHT_ANGLE):
                arg = ""
            else:
                argument = self._consume(WORD_TOKENS, "expected string or right angle bracket")
                arg = self._word_text(argument)
                self._consume({TokenType.RIGHT_ANGLE}, "expected right angle bracket")

        self._consume({TokenType.PERIOD}, "expected period")
        trait = self._consume(NAME_TOKENS, "expected string")

        return TraitTag(src.value, arg, trait.value, selector=True)

    # ========================================================================
    # Singletons
    # ========================================================================

    def _reduce_number(self, token: Token) -> Expression:
        return word_expression(token.lexeme)

    def _reduce_string_literal(self, token: Token) -> Raw:
        # Quoted text is never reinterpreted as a number
        return Raw(token.value)

    def _reduce_colon(self, token: Token) -> Colon:
        return Colon()

    def _reduce_arithmetic(self, token: Token) -> Arithmetic:
        return Arithmetic(ARITHMETIC_OPERATORS[token.type])

    def _reduce_relational(self, token: Token) -> Relational:
        return Relational(RELATIONAL_OPERATORS[token.type])

    def _reject_reserved(self, token: Token) -> Expression:
        raise self._fail(NotYetImplemented(token))

    def _reject_expression_start(self, token: Token) -> Expression:
        raise self._fail(InvalidToken(token, "incorrect token to start expression"))

    def _reject_unsupported(self, token: Token) -> Expression:
        raise self._fail(NotSupported(token))

    # ========================================================================
    # Token cursor
    # ========================================================================

    @staticmethod
    def _word_text(token: Token) -> str:
        """Text of a bare word; numbers keep their source spelling."""
        if token.type == TokenType.NUMBER:
            return token.lexeme
        return token.value

    def _consume(self, token_types, missing: str, invalid: Optional[str] = None) -> Token:
        """
        Consume the next token if it has one of the given types.

        Raises UnexpectedLastToken (with `missing`) when the tokens ran out,
        InvalidToken (with `invalid`, defaulting to `missing`) otherwise.
        """
        if self._is_at_end():
            raise self._fail(create_unexpected_end_error(self._previous(), missing))

        token = self._advance()
        if token.type not in token_types:
            raise self._fail(create_invalid_token_error(token, invalid or missing))
        return token

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _fail(self, error: ReduceError) -> ReduceError:
        logger.debug("Returning error: %r", error)
        return error


def reduce_tokens(tokens: Iterable[Token]) -> List[Expression]:
    """
    Convenience function to reduce tokens to expressions.

    Raises:
        ReduceError: If reduction fails
    """
    return Reducer(tokens).reduce()


def reduce_line(line: Line) -> Line:
    """Reduce a line of tokens to a line of expressions with the same indent."""
    return Line(line.leading_whitespace, reduce_tokens(line.members))
