"""
brik.parser - Brik configuration language front end

Lexer and parser for .brik files, the AST they produce, and the
canonical text/JSON serializers for that AST.
"""

from brik.parser.lexer import (
    Lexer,
    Token,
    TokenType,
    BrikSyntaxError,
    LexerError,
    read_source,
    tokenize_file,
)
from brik.parser.parser import (
    Parser,
    ParseError,
    parse_file,
    parse_source,
)
from brik.parser.nodes import (
    # AST Node types
    ASTNode,
    NodeType,
    ProgramNode,
    SectionNode,
    AssignNode,
    EnumDefNode,
    EnumEntry,
    StructDefNode,
    NumberNode,
    StringNode,
    BoolNode,
    IdentNode,
    NullNode,
    ListNode,
    TupleNode,
    ObjectNode,
    ObjectField,
)
from brik.parser.ast_serde import (
    SerializeOptions,
    serialize,
    to_text,
    serialize_ast,
    deserialize_ast,
    count_ast_nodes,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "BrikSyntaxError",
    "LexerError",
    "read_source",
    "tokenize_file",
    # Parser
    "Parser",
    "ParseError",
    "parse_file",
    "parse_source",
    # AST Nodes
    "ASTNode",
    "NodeType",
    "ProgramNode",
    "SectionNode",
    "AssignNode",
    "EnumDefNode",
    "EnumEntry",
    "StructDefNode",
    "NumberNode",
    "StringNode",
    "BoolNode",
    "IdentNode",
    "NullNode",
    "ListNode",
    "TupleNode",
    "ObjectNode",
    "ObjectField",
    # Serialization
    "SerializeOptions",
    "serialize",
    "to_text",
    "serialize_ast",
    "deserialize_ast",
    "count_ast_nodes",
]
