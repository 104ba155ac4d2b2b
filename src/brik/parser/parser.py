"""
Brik Parser

Recursive-descent parser over the lexer's token stream with exactly one token
of lookahead. Builds the tree defined in brik.parser.nodes.
"""

import logging
from typing import List, Optional

from brik.parser.lexer import (
    BrikSyntaxError,
    Lexer,
    Token,
    TokenType,
    TOKEN_DESCRIPTIONS,
    read_source,
)
from brik.parser.nodes import (
    AssignNode,
    BoolNode,
    EnumDefNode,
    EnumEntry,
    Expr,
    IdentNode,
    Item,
    ListNode,
    NullNode,
    NumberNode,
    ObjectField,
    ObjectNode,
    ProgramNode,
    SectionNode,
    StringNode,
    StructDefNode,
    TupleNode,
)

logger = logging.getLogger(__name__)


class ParseError(BrikSyntaxError):
    """Error during parsing."""
    def __init__(self, message: str, token: Token = None, line: int = None, column: int = None):
        self.token = token
        line = line if line is not None else (token.line if token else 0)
        column = column if column is not None else (token.column if token else 0)
        super().__init__(message, line, column)


class Parser:
    """
    Parser for brik configuration files.

    Usage:
        parser = Parser(source_text)
        program = parser.parse()
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.filename = filename
        self.lexer = Lexer(source, filename)
        self.current: Token = self.lexer.next_token()

    def _advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        self.current = self.lexer.next_token()
        return token

    def _check(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def _error(self, message: str, token: Token = None) -> ParseError:
        token = token or self.current
        return ParseError(f"{message} at line {token.line}", token)

    def _eat(self, token_type: TokenType) -> Token:
        """Consume a token of the given type, raise without advancing otherwise."""
        if self.current.type != token_type:
            raise self._error(f"expected {TOKEN_DESCRIPTIONS[token_type]}")
        return self._advance()

    def parse(self) -> ProgramNode:
        """Parse the whole input into a ProgramNode."""
        items: List[Item] = []

        while not self._check(TokenType.EOF):
            items.append(self._parse_item())

        return ProgramNode(items=tuple(items), filename=self.filename, line=1, column=1)

    def _parse_item(self) -> Item:
        token = self.current

        if token.type == TokenType.LBRACKET:
            return self._parse_section()
        if token.type == TokenType.IDENTIFIER:
            return self._parse_assign()
        if token.type == TokenType.ENUM:
            return self._parse_enum()
        if token.type == TokenType.STRUCT:
            return self._parse_struct()

        raise self._error(f"unexpected token {token.description}")

    def _parse_section(self) -> SectionNode:
        """[name] followed by assignments until the next non-identifier."""
        open_token = self._eat(TokenType.LBRACKET)

        if not self._check(TokenType.IDENTIFIER):
            raise self._error("invalid section name")
        name = self._advance().value
        self._eat(TokenType.RBRACKET)

        body = []
        while self._check(TokenType.IDENTIFIER):
            body.append(self._parse_assign())

        return SectionNode(name=name, body=tuple(body), line=open_token.line, column=open_token.column)

    def _parse_assign(self) -> AssignNode:
        key_token = self._eat(TokenType.IDENTIFIER)
        self._eat(TokenType.EQUALS)
        value = self._parse_expr()
        return AssignNode(key=key_token.value, value=value, line=key_token.line, column=key_token.column)

    def _parse_expr(self) -> Expr:
        token = self.current
        loc = {'line': token.line, 'column': token.column}

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumberNode(value=token.number, text=token.value, **loc)
        if token.type == TokenType.STRING:
            self._advance()
            return StringNode(value=token.value, **loc)
        if token.type == TokenType.TRUE:
            self._advance()
            return BoolNode(value=True, **loc)
        if token.type == TokenType.FALSE:
            self._advance()
            return BoolNode(value=False, **loc)
        if token.type == TokenType.NULL:
            self._advance()
            return NullNode(**loc)
        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return IdentNode(name=token.value, **loc)
        if token.type == TokenType.LPAREN:
            return TupleNode(items=self._parse_sequence(TokenType.LPAREN, TokenType.RPAREN), **loc)
        if token.type == TokenType.LBRACKET:
            return ListNode(items=self._parse_sequence(TokenType.LBRACKET, TokenType.RBRACKET), **loc)
        if token.type == TokenType.LBRACE:
            return self._parse_object()

        raise self._error("invalid expression")

    def _parse_sequence(self, opener: TokenType, closer: TokenType) -> tuple:
        """Comma-separated expressions between opener and closer; no trailing comma."""
        self._eat(opener)

        items = []
        if not self._check(closer):
            items.append(self._parse_expr())
            while self._check(TokenType.COMMA):
                self._advance()
                items.append(self._parse_expr())

        self._eat(closer)
        return tuple(items)

    def _parse_object(self) -> ObjectNode:
        open_token = self._eat(TokenType.LBRACE)

        fields = []
        # A trailing comma is fine here: the loop re-checks for '}' first
        while not self._check(TokenType.RBRACE):
            key_token = self._eat(TokenType.IDENTIFIER)
            self._eat(TokenType.COLON)
            value = self._parse_expr()
            fields.append(ObjectField(key=key_token.value, value=value,
                                      line=key_token.line, column=key_token.column))
            if not self._check(TokenType.COMMA):
                break
            self._advance()

        self._eat(TokenType.RBRACE)
        return ObjectNode(fields=tuple(fields), line=open_token.line, column=open_token.column)

    def _parse_enum(self) -> EnumDefNode:
        """enum Name { KEY: number [,] ... }"""
        enum_token = self._eat(TokenType.ENUM)
        name = self._eat(TokenType.IDENTIFIER).value
        self._eat(TokenType.LBRACE)

        entries = []
        while self._check(TokenType.IDENTIFIER):
            key_token = self._advance()
            self._eat(TokenType.COLON)
            number = self._eat(TokenType.NUMBER)
            entries.append(EnumEntry(name=key_token.value, value=number.number,
                                     line=key_token.line, column=key_token.column))
            if not self._check(TokenType.COMMA):
                break
            self._advance()

        self._eat(TokenType.RBRACE)
        return EnumDefNode(name=name, entries=tuple(entries),
                           line=enum_token.line, column=enum_token.column)

    def _parse_struct(self) -> StructDefNode:
        """
        struct Name { field [, | = expr | : expr] ... }

        Field lists are parsed leniently: any token that cannot start or
        follow a field is skipped instead of raising, so loosely written
        bodies still produce their field names. Default values are parsed
        (and must be valid expressions) but not kept.
        """
        struct_token = self._eat(TokenType.STRUCT)
        name = self._eat(TokenType.IDENTIFIER).value
        self._eat(TokenType.LBRACE)

        fields = []
        while not self._check(TokenType.RBRACE) and not self._check(TokenType.EOF):
            if not self._check(TokenType.IDENTIFIER):
                skipped = self._advance()
                logger.debug("struct %s: skipping %s at line %d", name, skipped.description, skipped.line)
                continue

            fields.append(self._advance().value)
            if self._check(TokenType.EQUALS) or self._check(TokenType.COLON):
                self._advance()
                self._parse_expr()
            if self._check(TokenType.COMMA):
                self._advance()

        self._eat(TokenType.RBRACE)
        return StructDefNode(name=name, fields=tuple(fields),
                             line=struct_token.line, column=struct_token.column)


def parse_source(source: str, filename: str = "<unknown>") -> ProgramNode:
    """Parse source text into an AST."""
    return Parser(source, filename).parse()


def parse_file(filepath: str, encodings: Optional[tuple] = None) -> ProgramNode:
    """Parse a file into an AST. Handles encoding fallback."""
    source = read_source(filepath, encodings) if encodings else read_source(filepath)
    program = parse_source(source, str(filepath))
    logger.debug("parsed %s: %d top-level items", filepath, len(program.items))
    return program
