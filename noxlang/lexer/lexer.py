"""
nox Lexer - turns .nox source text into tokens

Single pass, one character of lookahead. The only place a character is
"given back" is composite-operator absorption, and that is done by simply
not advancing past the lookahead.

Two surfaces share the same character rules:
- tokenize() scans a whole input and emits INDENT/DEDENT tokens
- scan_line() scans one logical line and reports its leading indent width
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_OPERATORS, COMPOSABLE_OPERATORS,
    COMPOSITE_SUFFIX, COMMENT_CHAR, ESCAPE_CHAR, QUOTE_CHARS,
    is_identifier_start, is_identifier_continue
)
from .errors import (
    LexerError, NoTokensPresent, create_invalid_character_error,
    create_unterminated_string_error, create_dangling_escape_error,
    create_mixed_indent_error, create_indent_step_error
)
from ..config import NoxConfiguration
from ..lines import Line

logger = logging.getLogger(__name__)


class IndentationTracker:
    """
    Tracks block structure across the lines of one input.

    The first non-empty indent fixes both the indent character and the
    step width. Every later indent has to use that character only and be
    a whole number of steps.
    """

    def __init__(self):
        self.level = 0
        self.indent_char: Optional[str] = None
        self.step: Optional[int] = None

    def measure(self, indent: str, location: SourceLocation) -> List[TokenType]:
        """Validate a line's leading whitespace and return the markers it opens or closes."""
        width = len(indent)

        if width:
            if self.indent_char is None:
                self.indent_char = indent[0]
            if any(char != self.indent_char for char in indent):
                raise create_mixed_indent_error(location)
            if self.step is None:
                self.step = width
            if width % self.step:
                raise create_indent_step_error(width, self.step, location)

        if width > self.level:
            markers = [TokenType.INDENT] * ((width - self.level) // self.step)
        elif width < self.level:
            markers = [TokenType.DEDENT] * ((self.level - width) // self.step)
        else:
            markers = []

        self.level = width
        return markers

    def close(self) -> List[TokenType]:
        """Return the DEDENT markers that bring the level back to zero."""
        if not self.level:
            return []
        markers = [TokenType.DEDENT] * (self.level // self.step)
        self.level = 0
        return markers


class Lexer:
    """
    nox lexical analyzer.

    Converts source text into a list of tokens. Scanning stops at the
    first error; the partial token list is discarded.
    """

    def __init__(self, source: str, filename: Optional[str] = None,
                 config: Optional[NoxConfiguration] = None):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text; trailing whitespace is trimmed before scanning
            filename: Name of source file for error reporting
            config: Shared configuration; supplies the filename when none is given
        """
        self.config = config or NoxConfiguration()
        self.source = source.rstrip()
        self.filename = filename if filename is not None else self.config.filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.indentation = IndentationTracker()
        self._single_line = False

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire input using INDENT/DEDENT block markers.

        Returns:
            List of tokens; empty when the input holds only whitespace and comments

        Raises:
            LexerError: If scanning fails
        """
        self._reset(single_line=False)

        # The input behaves as if it were preceded by a newline
        self._scan_line_start()

        while not self._is_at_end():
            self._scan_token()

        for marker in self.indentation.close():
            self._push(marker, "", None, self._location())

        return self.tokens

    def scan_line(self) -> Line:
        """
        Tokenize the input as a single logical line.

        Returns:
            Line of tokens together with the width of its leading indent

        Raises:
            NoTokensPresent: If the line is blank or only a comment
            LexerError: If scanning fails
        """
        self._reset(single_line=True)

        leading_whitespace = 0
        if not self._is_at_end():
            indent_char = self._current()
            while not self._is_at_end() and self._current().isspace():
                if self._current() != indent_char:
                    raise self._fail(create_mixed_indent_error(self._location()))
                leading_whitespace += 1
                self._advance()

        while not self._is_at_end():
            self._scan_token()

        if not self.tokens:
            raise self._fail(NoTokensPresent(self._location()))

        return Line(leading_whitespace, self.tokens)

    def _reset(self, single_line: bool):
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.indentation = IndentationTracker()
        self._single_line = single_line

    def _scan_token(self):
        """Scan whatever starts at the current character."""
        current_char = self._current()

        if current_char == COMMENT_CHAR:
            self._skip_comment()
        elif current_char == '\n':
            self._advance()
            if not self._single_line:
                self._scan_line_start()
        elif current_char in QUOTE_CHARS:
            self._tokenize_string()
        elif current_char.isdecimal():
            self._tokenize_number()
        elif current_char == ESCAPE_CHAR or is_identifier_start(current_char):
            self._tokenize_word(self._location(), self.pos)
        elif current_char in SINGLE_CHAR_OPERATORS:
            location = self._location()
            self._advance()
            self._push(SINGLE_CHAR_OPERATORS[current_char], current_char, None, location)
        elif current_char in COMPOSABLE_OPERATORS:
            self._tokenize_operator()
        elif current_char.isspace():
            self._advance()
        else:
            raise self._fail(create_invalid_character_error(current_char, self._location()))

    def _scan_line_start(self):
        """Run the indentation subroutine for the line starting at the cursor."""
        location = self._location()
        indent = []

        while not self._is_at_end() and self._current() != '\n' and self._current().isspace():
            indent.append(self._current())
            self._advance()

        # Blank and comment-only lines leave the block structure alone
        if self._is_at_end() or self._current() in ('\n', COMMENT_CHAR):
            return

        try:
            markers = self.indentation.measure(''.join(indent), location)
        except LexerError as e:
            raise self._fail(e)

        for marker in markers:
            self._push(marker, "", None, location)

    def _skip_comment(self):
        """Skip a comment up to, but not including, the next newline."""
        while not self._is_at_end() and self._current() != '\n':
            self._advance()

    def _tokenize_operator(self):
        """Tokenize = < > !, absorbing a following '=' into a composite."""
        location = self._location()
        char = self._current()
        single, composite = COMPOSABLE_OPERATORS[char]
        self._advance()

        if not self._is_at_end() and self._current() == COMPOSITE_SUFFIX:
            self._advance()
            self._push(composite, char + COMPOSITE_SUFFIX, None, location)
        else:
            self._push(single, char, None, location)

    def _tokenize_string(self):
        """Tokenize a quoted literal; a backslash escapes the next character."""
        location = self._location()
        start_pos = self.pos
        quote = self._current()
        self._advance()  # Skip opening quote

        value_parts = []

        while True:
            if self._is_at_end():
                raise self._fail(create_unterminated_string_error(quote, ''.join(value_parts), location))

            char = self._current()
            if char == quote:
                self._advance()  # Skip closing quote
                break
            if char == ESCAPE_CHAR:
                value_parts.append(self._escaped_char())
                continue

            value_parts.append(char)
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        self._push(TokenType.STRING_LITERAL, lexeme, ''.join(value_parts), location)

    def _tokenize_number(self):
        """Tokenize `digit+ ('.' digit*)?`; an escape turns the run into an identifier."""
        location = self._location()
        start_pos = self.pos

        while not self._is_at_end() and self._current().isdecimal():
            self._advance()

        # Only one period belongs to a number; a second one is its own token
        if not self._is_at_end() and self._current() == '.':
            self._advance()
            while not self._is_at_end() and self._current().isdecimal():
                self._advance()

        if not self._is_at_end() and self._current() == ESCAPE_CHAR:
            self._tokenize_word(location, start_pos, list(self.source[start_pos:self.pos]))
            return

        lexeme = self.source[start_pos:self.pos]
        self._push(TokenType.NUMBER, lexeme, float(lexeme), location)

    def _tokenize_word(self, location: SourceLocation, start_pos: int,
                       value_parts: Optional[List[str]] = None):
        """Tokenize an identifier, taking escaped characters verbatim."""
        value_parts = value_parts if value_parts is not None else []

        while not self._is_at_end():
            char = self._current()
            if char == ESCAPE_CHAR:
                value_parts.append(self._escaped_char())
            elif is_identifier_continue(char):
                value_parts.append(char)
                self._advance()
            else:
                break

        lexeme = self.source[start_pos:self.pos]
        self._push(TokenType.IDENTIFIER, lexeme, ''.join(value_parts), location)

    def _escaped_char(self) -> str:
        """Consume a backslash and return the character it escapes."""
        location = self._location()
        self._advance()  # Skip backslash
        if self._is_at_end():
            raise self._fail(create_dangling_escape_error(location))
        char = self._current()
        self._advance()
        return char

    def _push(self, token_type: TokenType, lexeme: str, value, location: SourceLocation):
        token = Token(token_type, lexeme, value, location)
        logger.debug("Pushing token: %r", token)
        self.tokens.append(token)

    def _fail(self, error: LexerError) -> LexerError:
        logger.debug("Returning error: %r", error)
        return error

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _current(self) -> str:
        return self.source[self.pos]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1


def parse_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If scanning fails
    """
    return Lexer(source, filename).tokenize()


def parse_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a .nox file.

    Raises:
        LexerError: If scanning fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)


def scan_line(text: str, filename: str = "<string>") -> Line:
    """Tokenize one logical line. Raises NoTokensPresent for blank lines."""
    return Lexer(text, filename).scan_line()
