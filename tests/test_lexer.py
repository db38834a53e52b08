"""
Test suite for the nox lexer.

Tests cover:
- Character recognition rules (comments, strings, numbers, identifiers, operators)
- Backslash escapes in words and string literals
- Composite operator absorption with one character of lookahead
- Scan errors and their diagnostics
- Single-line scanning with leading whitespace counts

Author: nox maintainers
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from noxlang.lexer.lexer import Lexer, parse_string, parse_file, scan_line
from noxlang.lexer.tokens import Token, TokenType, make_token, format_number, escape_word
from noxlang.lexer.errors import (
    NoTokensPresent, InconsistentWhitespace, UnexpectedEndOfLine,
    UnterminatedStringLiteral, InvalidCharacter, ERROR_CODES
)
from noxlang.lines import Line


def ident(text):
    return make_token(TokenType.IDENTIFIER, text)


def number(value, lexeme=None):
    return make_token(TokenType.NUMBER, float(value), lexeme)


def string(text):
    return make_token(TokenType.STRING_LITERAL, text)


def op(token_type):
    return make_token(token_type)


class TestTokenRecognition(unittest.TestCase):
    """Test cases for individual scanning rules."""

    def _types(self, source):
        return [token.type for token in parse_string(source)]

    def test_comment_only_input_is_empty(self):
        """A comment-only input scans to no tokens."""
        self.assertEqual(parse_string("# This line should be empty."), [])
        self.assertEqual(parse_string(""), [])
        self.assertEqual(parse_string("   \n\t\n"), [])

    def test_comment_runs_to_end_of_line(self):
        tokens = parse_string("a # b c\nd")
        self.assertEqual(tokens, [ident("a"), ident("d")])

    def test_identifier_with_call_parens(self):
        """Parentheses continue a word, so `me()` is one identifier."""
        tokens = parse_string("me().width")
        self.assertEqual(tokens, [ident("me()"), op(TokenType.PERIOD), ident("width")])

    def test_identifier_characters(self):
        tokens = parse_string("_private snake_case x2 ünïcode")
        self.assertEqual(
            [token.value for token in tokens],
            ["_private", "snake_case", "x2", "ünïcode"]
        )

    def test_single_char_operators(self):
        self.assertEqual(
            self._types("$ : . [ ] / * - + %"),
            [
                TokenType.DOLLAR, TokenType.COLON, TokenType.PERIOD,
                TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET, TokenType.SLASH,
                TokenType.ASTERISK, TokenType.MINUS, TokenType.PLUS, TokenType.MOD,
            ]
        )

    def test_operators_need_no_whitespace(self):
        tokens = parse_string("width-0.0")
        self.assertEqual(tokens, [ident("width"), op(TokenType.MINUS), number(0.0)])

    def test_operator_disambiguation(self):
        """One- and two-character operators are told apart by a single lookahead."""
        tokens = parse_string("0 = 1 == 2 > 3 >= 4 < 5 <= 6 ! 7 != 8.0")
        expected = [
            number(0), op(TokenType.EQUALS_SIGN),
            number(1), op(TokenType.EQUAL_TO),
            number(2), op(TokenType.RIGHT_ANGLE),
            number(3), op(TokenType.GREATER_THAN_EQUAL),
            number(4), op(TokenType.LEFT_ANGLE),
            number(5), op(TokenType.LESS_THAN_EQUAL),
            number(6), op(TokenType.BANG),
            number(7), op(TokenType.NOT_EQUAL),
            number(8.0),
        ]
        self.assertEqual(tokens, expected)

    def test_lone_composable_operators_at_end(self):
        for char, token_type in [("=", TokenType.EQUALS_SIGN), ("<", TokenType.LEFT_ANGLE),
                                 (">", TokenType.RIGHT_ANGLE), ("!", TokenType.BANG)]:
            with self.subTest(char=char):
                self.assertEqual(self._types("a " + char), [TokenType.IDENTIFIER, token_type])

    def test_composite_does_not_leave_second_char(self):
        self.assertEqual(self._types("a==b"), [TokenType.IDENTIFIER, TokenType.EQUAL_TO, TokenType.IDENTIFIER])
        self.assertEqual(self._types("<=="), [TokenType.LESS_THAN_EQUAL, TokenType.EQUALS_SIGN])

    def test_lookahead_keeps_following_char(self):
        """A failed lookahead leaves the next character for its own token."""
        self.assertEqual(self._types("<>"), [TokenType.LEFT_ANGLE, TokenType.RIGHT_ANGLE])
        self.assertEqual(self._types("!a"), [TokenType.BANG, TokenType.IDENTIFIER])


class TestNumbers(unittest.TestCase):
    """Test cases for numeric literals."""

    def test_integer_and_fraction(self):
        tokens = parse_string("42 0.5")
        self.assertEqual(tokens, [number(42), number(0.5)])
        self.assertEqual(tokens[0].lexeme, "42")
        self.assertEqual(tokens[1].lexeme, "0.5")

    def test_trailing_period_is_accepted(self):
        tokens = parse_string("1.")
        self.assertEqual(tokens, [number(1.0)])
        self.assertEqual(tokens[0].lexeme, "1.")

    def test_second_period_is_its_own_token(self):
        tokens = parse_string("1..2")
        self.assertEqual(tokens, [number(1.0), op(TokenType.PERIOD), number(2)])

    def test_number_followed_by_identifier(self):
        tokens = parse_string("10px")
        self.assertEqual(tokens, [number(10), ident("px")])

    def test_escape_turns_number_into_identifier(self):
        tokens = parse_string("0\\.0")
        self.assertEqual(tokens, [ident("0.0")])
        self.assertEqual(tokens[0].lexeme, "0\\.0")

    def test_number_payload_is_float(self):
        token = parse_string("7")[0]
        self.assertIsInstance(token.value, float)


class TestStringsAndEscapes(unittest.TestCase):
    """Test cases for string literals and backslash escapes."""

    def test_double_and_single_quotes(self):
        self.assertEqual(parse_string('"container" \'box\''), [string("container"), string("box")])

    def test_escaped_quote_inside_string(self):
        tokens = parse_string('"say \\"hi\\""')
        self.assertEqual(tokens, [string('say "hi"')])

    def test_other_quote_needs_no_escape(self):
        self.assertEqual(parse_string('"it\'s"'), [string("it's")])

    def test_operators_and_comments_inside_string(self):
        self.assertEqual(parse_string('"a = b # c"'), [string("a = b # c")])

    def test_newline_kept_inside_string(self):
        tokens = parse_string('"a\nb" c')
        self.assertEqual(tokens, [string("a\nb"), ident("c")])

    def test_escape_in_identifier(self):
        self.assertEqual(parse_string("a\\ b"), [ident("a b")])
        self.assertEqual(parse_string("a\\#b"), [ident("a#b")])

    def test_escape_starts_identifier(self):
        self.assertEqual(parse_string("\\$x"), [ident("$x")])

    def test_escape_at_end_of_input(self):
        with self.assertRaises(UnexpectedEndOfLine) as cm:
            parse_string("abc\\")
        self.assertEqual(cm.exception.expected, "char after backslash")
        self.assertEqual(str(cm.exception), "UnexpectedEndOfLine: char after backslash")

    def test_lone_backslash(self):
        with self.assertRaises(UnexpectedEndOfLine):
            parse_string("\\")

    def test_backslash_before_trimmed_whitespace(self):
        """Trailing whitespace is trimmed first, so the escape dangles."""
        with self.assertRaises(UnexpectedEndOfLine):
            parse_string("abc\\   ")

    def test_unterminated_string(self):
        with self.assertRaises(UnterminatedStringLiteral) as cm:
            parse_string('"abc')
        self.assertEqual(cm.exception.partial, "abc")
        self.assertEqual(str(cm.exception), "UnterminatedStringLiteral: abc")

    def test_string_ending_in_escape_is_unterminated(self):
        with self.assertRaises(UnterminatedStringLiteral):
            parse_string('"abc\\"')

    def test_mismatched_quote_is_unterminated(self):
        with self.assertRaises(UnterminatedStringLiteral):
            parse_string('"abc\'')


class TestScanErrors(unittest.TestCase):
    """Test cases for scan errors and diagnostics."""

    def test_invalid_character(self):
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("a @ b")
        self.assertEqual(cm.exception.char, "@")
        self.assertEqual(str(cm.exception), "InvalidCharacter: @")

    def test_open_paren_cannot_start_a_word(self):
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("(a)")
        self.assertIn("[", cm.exception.diagnostic.suggestions)

    def test_paren_after_whitespace_is_invalid(self):
        """Parentheses only continue a word; a detached one is rejected."""
        self.assertEqual(parse_string("me"), [ident("me")])
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("me ()")
        self.assertEqual(cm.exception.char, "(")
        self.assertEqual(cm.exception.location.column, 4)

    def test_lookalike_suggestions(self):
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("a ≠ b")
        diagnostic = cm.exception.diagnostic
        self.assertEqual(diagnostic.suggestions, ["!="])
        self.assertIn("!=", diagnostic.help_text)

    def test_error_location(self):
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("a\nbb @", "page.nox")
        location = cm.exception.location
        self.assertEqual((location.line, location.column, location.offset), (2, 4, 5))
        self.assertEqual(str(location), "page.nox:2:4")

    def test_diagnostic_report(self):
        with self.assertRaises(InvalidCharacter) as cm:
            parse_string("@")
        report = str(cm.exception.diagnostic)
        self.assertTrue(report.startswith("ERROR: @"))
        self.assertIn("--> <string>:1:1", report)
        self.assertEqual(cm.exception.diagnostic.code, "L005")

    def test_error_codes_are_registered(self):
        for error_type in (NoTokensPresent, InconsistentWhitespace, UnexpectedEndOfLine,
                           UnterminatedStringLiteral, InvalidCharacter):
            self.assertIn(error_type.code, ERROR_CODES)


class TestScanLine(unittest.TestCase):
    """Test cases for single-line scanning."""

    def test_leading_whitespace_count(self):
        line = scan_line("    a b  ")
        self.assertEqual(line, Line(4, [ident("a"), ident("b")]))

    def test_tab_indent(self):
        self.assertEqual(scan_line("\t\tx").leading_whitespace, 2)

    def test_mixed_leading_whitespace(self):
        for text in (" \tx", "\t x"):
            with self.subTest(text=text):
                with self.assertRaises(InconsistentWhitespace) as cm:
                    scan_line(text)
                self.assertEqual(str(cm.exception), "InconsistentWhitespace")

    def test_blank_line_has_no_tokens(self):
        for text in ("", "    ", "# This line should be empty.", "   # note"):
            with self.subTest(text=text):
                with self.assertRaises(NoTokensPresent) as cm:
                    scan_line(text)
                self.assertEqual(str(cm.exception), "NoTokensPresent")

    def test_newline_is_a_separator(self):
        self.assertEqual(scan_line("a\n    b"), Line(0, [ident("a"), ident("b")]))

    def test_no_indentation_markers(self):
        line = scan_line("  a")
        self.assertNotIn(TokenType.INDENT, [token.type for token in line])


class TestTokenModel(unittest.TestCase):
    """Test cases for tokens and their helpers."""

    def test_equality_ignores_lexeme_and_location(self):
        scanned = parse_string("  1.")[1]
        self.assertEqual(scanned, Token(TokenType.NUMBER, "1.0", 1.0))

    def test_make_token_lexemes(self):
        self.assertEqual(make_token(TokenType.NOT_EQUAL).lexeme, "!=")
        self.assertEqual(make_token(TokenType.NUMBER, 8.0).lexeme, "8")
        self.assertEqual(make_token(TokenType.IDENTIFIER, "rect").lexeme, "rect")

    def test_format_number(self):
        self.assertEqual(format_number(8.0), "8")
        self.assertEqual(format_number(0.5), "0.5")

    def test_escape_word(self):
        self.assertEqual(escape_word("me()"), "me()")
        self.assertEqual(escape_word("0.0"), "\\0\\.0")
        self.assertEqual(escape_word("a b"), "a\\ b")

    def test_token_text(self):
        tokens = parse_string('"a\\"b" c\\ d <= 1.')
        self.assertEqual([str(token) for token in tokens], ['"a\\"b"', "c\\ d", "<=", "1."])

    def test_repr(self):
        self.assertEqual(repr(ident("rect")), "Token(IDENTIFIER, 'rect')")
        self.assertEqual(repr(op(TokenType.COLON)), "Token(COLON)")

    def test_trailing_whitespace_is_insignificant(self):
        for text in ("rect name=\"container\":", "a\n    b", "$me<child>.width"):
            for suffix in (" ", "\t", "  \t "):
                with self.subTest(text=text, suffix=suffix):
                    self.assertEqual(parse_string(text), parse_string(text + suffix))


class TestLexerSurface(unittest.TestCase):
    """Test cases for the Lexer object and file helpers."""

    def test_lexer_is_restartable(self):
        lexer = Lexer("a b")
        self.assertEqual(lexer.tokenize(), lexer.tokenize())

    def test_filename_in_locations(self):
        token = Lexer("a", filename="page.nox").tokenize()[0]
        self.assertEqual(token.location.filename, "page.nox")

    def test_parse_file(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "page.nox")
            with open(path, "w", encoding="utf-8") as f:
                f.write("rect:\n    a\n")
            tokens = parse_file(path)

        self.assertEqual(
            tokens,
            [ident("rect"), op(TokenType.COLON), op(TokenType.INDENT), ident("a"), op(TokenType.DEDENT)]
        )
        self.assertEqual(tokens[0].location.filename, path)

    def test_parse_file_missing(self):
        with self.assertRaises(OSError):
            parse_file(os.path.join(project_root, "does-not-exist.nox"))


if __name__ == "__main__":
    unittest.main()
