"""
Brik Lexer (Tokenizer)

Converts raw .brik configuration text into a stream of tokens.
Handles: identifiers, keywords, punctuation, strings, numbers, comments.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


class TokenType(Enum):
    """Types of tokens in brik source."""
    EOF = auto()             # End of input
    LBRACKET = auto()        # [
    RBRACKET = auto()        # ]
    LPAREN = auto()          # (
    RPAREN = auto()          # )
    LBRACE = auto()          # {
    RBRACE = auto()          # }
    COMMA = auto()           # ,
    EQUALS = auto()          # =
    COLON = auto()           # :
    IDENTIFIER = auto()      # width, board.cell_size, _private
    NUMBER = auto()          # 10, -3, 0.25
    STRING = auto()          # "quoted string"
    TRUE = auto()            # true
    FALSE = auto()           # false
    NULL = auto()            # null
    ENUM = auto()            # enum
    STRUCT = auto()          # struct


# Human-readable names used in "expected ..." messages
TOKEN_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.LBRACKET: "'['",
    TokenType.RBRACKET: "']'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.COMMA: "','",
    TokenType.EQUALS: "'='",
    TokenType.COLON: "':'",
    TokenType.IDENTIFIER: "identifier",
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.TRUE: "'true'",
    TokenType.FALSE: "'false'",
    TokenType.NULL: "'null'",
    TokenType.ENUM: "'enum'",
    TokenType.STRUCT: "'struct'",
}

PUNCTUATION = {
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    ',': TokenType.COMMA,
    '=': TokenType.EQUALS,
    ':': TokenType.COLON,
}

KEYWORDS = {
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'null': TokenType.NULL,
    'enum': TokenType.ENUM,
    'struct': TokenType.STRUCT,
}

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '"': '"',
    '\\': '\\',
}


@dataclass
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int
    number: Optional[float] = None

    @property
    def description(self) -> str:
        return TOKEN_DESCRIPTIONS[self.type]

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


class BrikSyntaxError(Exception):
    """Base for lexical and syntax errors; always carries a source line."""
    def __init__(self, message: str, line: int, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)


class LexerError(BrikSyntaxError):
    """Error during lexical analysis."""


class Lexer:
    """
    Tokenizer for brik configuration files.

    Tokens are produced on demand:
        lexer = Lexer(source_text)
        token = lexer.next_token()

    or as a generator:
        tokens = list(lexer.tokenize())
    """

    @staticmethod
    def _is_digit(ch: str) -> bool:
        return '0' <= ch <= '9'

    @staticmethod
    def _is_ident_start(ch: str) -> bool:
        """Check if character can start an identifier (letter or underscore)."""
        return ch == '_' or ch.isalpha()

    @staticmethod
    def _is_ident_cont(ch: str) -> bool:
        """Check if character can continue an identifier."""
        return ch.isalpha() or Lexer._is_digit(ch) or ch in '_.'

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _advance(self) -> Optional[str]:
        """Advance one character and return it."""
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return ch

    def _skip_comment(self) -> None:
        while self._current() not in (None, '\n'):
            self._advance()

    def _skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, newlines and both comment styles."""
        while True:
            ch = self._current()
            if ch is None:
                return
            if ch.isspace():
                self._advance()
            elif ch == '#':
                self._skip_comment()
            elif ch == '/' and self._peek() == '/':
                self._skip_comment()
            else:
                return

    def _read_string(self) -> str:
        """Read a double-quoted string, resolving escapes."""
        start_line = self.line
        start_col = self.column

        # Skip opening quote
        self._advance()

        result = []
        while True:
            ch = self._current()
            if ch is None:
                raise LexerError(
                    f"unterminated string starting at line {start_line}, col {start_col}",
                    start_line, start_col,
                )
            if ch == '"':
                self._advance()
                break
            if ch == '\\':
                self._advance()
                esc = self._current()
                if esc is None:
                    continue  # reported as unterminated on the next pass
                # Unknown escapes yield the escaped character itself
                result.append(ESCAPES.get(esc, esc))
                self._advance()
            else:
                result.append(ch)
                self._advance()

        return ''.join(result)

    def _read_number(self) -> str:
        """Read a number (integer or decimal, optionally negative)."""
        result = []
        if self._current() == '-':
            result.append('-')
            self._advance()

        has_dot = False
        while True:
            ch = self._current()
            if ch is None:
                break
            if self._is_digit(ch):
                result.append(ch)
                self._advance()
            elif ch == '.' and not has_dot:
                has_dot = True
                result.append(ch)
                self._advance()
            else:
                break

        return ''.join(result)

    def _read_identifier(self) -> str:
        """Read an identifier (including dotted names like board.width)."""
        result = []
        while True:
            ch = self._current()
            if ch is None or not self._is_ident_cont(ch):
                break
            result.append(ch)
            self._advance()
        return ''.join(result)

    def next_token(self) -> Token:
        """Return the next token. Keeps returning EOF once input is exhausted."""
        self._skip_whitespace_and_comments()

        ch = self._current()
        start_line = self.line
        start_col = self.column

        if ch is None:
            return Token(TokenType.EOF, '', start_line, start_col)

        if ch in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[ch], ch, start_line, start_col)

        if ch == '"':
            value = self._read_string()
            return Token(TokenType.STRING, value, start_line, start_col)

        next_ch = self._peek()
        if self._is_digit(ch) or (ch == '-' and next_ch is not None and self._is_digit(next_ch)):
            lexeme = self._read_number()
            return Token(TokenType.NUMBER, lexeme, start_line, start_col, number=float(lexeme))

        if self._is_ident_start(ch):
            value = self._read_identifier()
            return Token(KEYWORDS.get(value, TokenType.IDENTIFIER), value, start_line, start_col)

        raise LexerError(
            f"unexpected character '{ch}' at line {start_line}, col {start_col}",
            start_line, start_col,
        )

    def tokenize(self) -> Iterator[Token]:
        """Generate tokens from the source, ending with a single EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break

    def tokenize_all(self) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize())


def read_source(filepath: str, encodings=('utf-8-sig', 'utf-8', 'latin-1')) -> str:
    """Read a source file, trying each encoding in turn."""
    last_error = None
    for encoding in encodings:
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError as e:
            last_error = e
    if last_error is None:
        raise ValueError("no source encodings configured")
    raise last_error


def tokenize_file(filepath: str) -> List[Token]:
    """Tokenize a file and return all tokens."""
    lexer = Lexer(read_source(filepath), filename=filepath)
    return lexer.tokenize_all()
