"""
Tests for the brik lexer.
"""

import pytest

from brik.parser import Lexer, LexerError, TokenType, BrikSyntaxError, tokenize_file


def kinds(source):
    return [t.type for t in Lexer(source).tokenize()]


class TestPunctuation:
    """Single-character tokens."""

    def test_all_punctuation(self):
        """Each punctuation character has its own kind."""
        assert kinds("[ ] ( ) , = { } :") == [
            TokenType.LBRACKET, TokenType.RBRACKET,
            TokenType.LPAREN, TokenType.RPAREN,
            TokenType.COMMA, TokenType.EQUALS,
            TokenType.LBRACE, TokenType.RBRACE,
            TokenType.COLON, TokenType.EOF,
        ]

    def test_empty_source(self):
        """Empty input is just EOF."""
        assert kinds("") == [TokenType.EOF]

    def test_eof_repeats(self):
        """next_token keeps returning EOF after the end."""
        lexer = Lexer("x")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        for _ in range(3):
            assert lexer.next_token().type == TokenType.EOF


class TestLiterals:
    """Numbers, strings, identifiers and keywords."""

    def test_numbers(self):
        """Integers, decimals and negatives keep their lexeme and value."""
        tokens = Lexer("10 3.5 -2 -0.25").tokenize_all()
        assert [t.value for t in tokens[:-1]] == ["10", "3.5", "-2", "-0.25"]
        assert [t.number for t in tokens[:-1]] == [10.0, 3.5, -2.0, -0.25]
        assert all(t.type == TokenType.NUMBER for t in tokens[:-1])

    def test_single_decimal_point(self):
        """A second '.' ends the number."""
        lexer = Lexer("1.5.")
        token = lexer.next_token()
        assert token.value == "1.5"
        with pytest.raises(LexerError):
            lexer.next_token()

    def test_keywords(self):
        """Reserved words get their own kinds."""
        assert kinds("true false null enum struct") == [
            TokenType.TRUE, TokenType.FALSE, TokenType.NULL,
            TokenType.ENUM, TokenType.STRUCT, TokenType.EOF,
        ]

    def test_dotted_identifier(self):
        """Identifiers may contain dots and digits."""
        tokens = Lexer("Color.RED _x2 truey").tokenize_all()
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.IDENTIFIER, "Color.RED"),
            (TokenType.IDENTIFIER, "_x2"),
            (TokenType.IDENTIFIER, "truey"),
        ]

    def test_string_escapes(self):
        """Known escapes are resolved, unknown ones yield the character."""
        token = Lexer(r'"a\nb\t\"q\" \\ \r \z"').next_token()
        assert token.type == TokenType.STRING
        assert token.value == 'a\nb\t"q" \\ \r z'

    def test_string_with_comment_markers(self):
        """Comment markers inside strings are kept."""
        token = Lexer('"# not // a comment"').next_token()
        assert token.value == "# not // a comment"


class TestComments:
    """Both comment styles run to end of line."""

    def test_slash_comment(self):
        """A // line contributes no tokens."""
        assert kinds("// ignored\nx = 1") == [
            TokenType.IDENTIFIER, TokenType.EQUALS, TokenType.NUMBER, TokenType.EOF,
        ]

    def test_hash_comment_mid_line(self):
        """A # after code truncates the rest of the line."""
        assert kinds("x = 1 # trailing = [\ny = 2") == [
            TokenType.IDENTIFIER, TokenType.EQUALS, TokenType.NUMBER,
            TokenType.IDENTIFIER, TokenType.EQUALS, TokenType.NUMBER,
            TokenType.EOF,
        ]

    def test_comment_at_end_of_input(self):
        """A comment without a trailing newline ends cleanly."""
        assert kinds("x = 1 // done") == [
            TokenType.IDENTIFIER, TokenType.EQUALS, TokenType.NUMBER, TokenType.EOF,
        ]


class TestLocations:
    """Line and column bookkeeping."""

    def test_line_and_column(self):
        """Columns reset after each newline."""
        tokens = Lexer("a = 1\n  b = 2").tokenize_all()
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[2].line, tokens[2].column) == (1, 5)
        assert (tokens[3].line, tokens[3].column) == (2, 3)

    def test_multiline_string_advances_line(self):
        """Newlines inside strings still count."""
        tokens = Lexer('s = "a\nb"\nt = 1').tokenize_all()
        t = [tok for tok in tokens if tok.value == "t"][0]
        assert t.line == 3


class TestLexerErrors:
    """Fatal lexical errors."""

    def test_unexpected_character(self):
        """Unknown characters report line and column."""
        with pytest.raises(LexerError) as exc:
            Lexer("x = 1\ny = $").tokenize_all()
        assert exc.value.line == 2
        assert exc.value.column == 5
        assert str(exc.value) == "unexpected character '$' at line 2, col 5"

    def test_lone_slash(self):
        """A single '/' is not a comment."""
        with pytest.raises(LexerError):
            Lexer("x = 1 / 2").tokenize_all()

    def test_lone_minus(self):
        """A '-' not followed by a digit is rejected."""
        with pytest.raises(LexerError):
            Lexer("x = -y").tokenize_all()

    def test_unterminated_string(self):
        """Reports the line where the string opened."""
        with pytest.raises(LexerError) as exc:
            Lexer('a = 1\ns = "abc\n\n').tokenize_all()
        assert exc.value.line == 2
        assert "unterminated string" in str(exc.value)

    def test_unterminated_after_backslash(self):
        """A trailing backslash does not close the string."""
        with pytest.raises(LexerError):
            Lexer('s = "abc\\').tokenize_all()

    def test_lexer_error_is_syntax_error(self):
        """Callers can catch both error kinds through the common base."""
        assert issubclass(LexerError, BrikSyntaxError)


class TestTokenizeFile:
    """File helpers."""

    def test_tokenize_fixture(self, tetris_path):
        """The sample file tokenizes and ends with EOF."""
        tokens = tokenize_file(str(tetris_path))
        assert tokens[-1].type == TokenType.EOF
        assert tokens[0].type == TokenType.ENUM

    def test_missing_file(self, tmp_path):
        """Missing files surface as OSError."""
        with pytest.raises(OSError):
            tokenize_file(str(tmp_path / "nope.brik"))
