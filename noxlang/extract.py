"""
Line extraction: scan one line and reduce it to expressions.
"""

import logging
from typing import Iterator, Tuple, Union

from .lexer.errors import LexerError, NoTokensPresent
from .lexer.lexer import scan_line
from .lines import Line, LineFailure, TokenFailure, ExprFailure
from .parser.errors import ReduceError
from .parser.reducer import reduce_line

logger = logging.getLogger(__name__)


def extract_line(text: str, filename: str = "<string>") -> Line:
    """
    Scan `text` as one logical line and reduce it to expressions.

    Raises:
        TokenFailure: If scanning fails (including NoTokensPresent for blank lines)
        ExprFailure: If reduction fails
    """
    try:
        tokens = scan_line(text, filename)
    except LexerError as e:
        raise TokenFailure(e) from e

    try:
        return reduce_line(tokens)
    except ReduceError as e:
        raise ExprFailure(e) from e


def extract_lines(source: str, filename: str = "<string>") -> Iterator[Tuple[int, Union[Line, LineFailure]]]:
    """
    Extract every line of `source`, yielding `(line_number, result)` pairs.

    A failing line yields its LineFailure and extraction carries on with
    the next line. Blank and comment-only lines are skipped.
    """
    for number, text in enumerate(source.split('\n'), start=1):
        try:
            yield number, extract_line(text, filename)
        except LineFailure as e:
            if isinstance(e.error, NoTokensPresent):
                continue
            logger.debug("Line %d failed: %s", number, e)
            yield number, e
