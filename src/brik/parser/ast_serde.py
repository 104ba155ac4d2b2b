"""
AST Serialization — canonical tree text and JSON forms.

ARCHITECTURAL RULE: this module depends only on the stdlib and
brik.parser.nodes. It never parses.

The tree text form is what `brik compile` writes to build/arbol.ast:

    (Program
      (Section board
        (Assign width
          (Number 10)
        )
      )
    )

Usage:
    from brik.parser.ast_serde import serialize, to_text, serialize_ast
"""

import io
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, TextIO, Union

from brik.parser.nodes import (
    AssignNode,
    BoolNode,
    EnumDefNode,
    EnumEntry,
    IdentNode,
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

_STRING_ESCAPES = str.maketrans({
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\t': '\\t',
    '\r': '\\r',
})


@dataclass
class SerializeOptions:
    """Configuration for the tree printer."""
    indent_char: str = " "
    indent_size: int = 2       # indent chars per nesting level


def format_number(value: float) -> str:
    """Integral values print without a trailing .0 (10, not 10.0); -0 keeps its sign."""
    if value.is_integer() and abs(value) < 1e16:
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def quote_string(value: str) -> str:
    return '"' + value.translate(_STRING_ESCAPES) + '"'


class TreePrinter:
    """
    Writes the canonical tagged-text form of a tree.

    Output is streamed to ``out`` node by node; each node is visited once,
    in document order.
    """

    def __init__(self, out: TextIO, options: SerializeOptions = None):
        self.out = out
        self.options = options or SerializeOptions()

    def _indent(self, level: int) -> str:
        return self.options.indent_char * (self.options.indent_size * level)

    def _leaf(self, level: int, text: str) -> None:
        self.out.write(f"{self._indent(level)}({text})\n")

    def _open(self, level: int, text: str) -> None:
        self.out.write(f"{self._indent(level)}({text}\n")

    def _close(self, level: int) -> None:
        self.out.write(f"{self._indent(level)})\n")

    def _branch(self, level: int, head: str, children) -> None:
        """A node with child nodes; collapses to one line when there are none."""
        if not children:
            self._leaf(level, head)
            return
        self._open(level, head)
        for child in children:
            self.visit(child, level + 1)
        self._close(level)

    def visit(self, node, level: int = 0) -> None:
        if isinstance(node, ProgramNode):
            self._branch(level, "Program", node.items)
        elif isinstance(node, SectionNode):
            self._branch(level, f"Section {node.name}", node.body)
        elif isinstance(node, AssignNode):
            self._branch(level, f"Assign {node.key}", (node.value,))
        elif isinstance(node, EnumDefNode):
            self._branch(level, f"EnumDef {node.name}", node.entries)
        elif isinstance(node, EnumEntry):
            self._leaf(level, f"Entry {node.name} {format_number(node.value)}")
        elif isinstance(node, StructDefNode):
            if not node.fields:
                self._leaf(level, f"StructDef {node.name}")
                return
            self._open(level, f"StructDef {node.name}")
            for name in node.fields:
                self._leaf(level + 1, f"Field {name}")
            self._close(level)
        elif isinstance(node, NumberNode):
            self._leaf(level, f"Number {format_number(node.value)}")
        elif isinstance(node, StringNode):
            self._leaf(level, f"String {quote_string(node.value)}")
        elif isinstance(node, BoolNode):
            self._leaf(level, f"Bool {'true' if node.value else 'false'}")
        elif isinstance(node, IdentNode):
            self._leaf(level, f"Ident {node.name}")
        elif isinstance(node, NullNode):
            self._leaf(level, "Null")
        elif isinstance(node, ListNode):
            self._branch(level, "List", node.items)
        elif isinstance(node, TupleNode):
            self._branch(level, "Tuple", node.items)
        elif isinstance(node, ObjectNode):
            self._branch(level, "Object", node.fields)
        elif isinstance(node, ObjectField):
            self._branch(level, f"Field {node.key}", (node.value,))
        else:
            raise TypeError(f"cannot serialize {type(node).__name__}")


def serialize(program: ProgramNode, destination: Union[TextIO, str, Path],
              options: SerializeOptions = None) -> None:
    """
    Write the canonical tree text of ``program`` to ``destination``.

    Args:
        program: Parsed tree root
        destination: An open text stream, or a path to create/overwrite.
            A path is opened here and closed on every exit path.
        options: Indentation settings
    """
    if isinstance(destination, (str, Path)):
        with open(destination, 'w', encoding='utf-8') as f:
            TreePrinter(f, options).visit(program)
    else:
        TreePrinter(destination, options).visit(program)


def to_text(program: ProgramNode, options: SerializeOptions = None) -> str:
    """Return the canonical tree text as a string."""
    buf = io.StringIO()
    TreePrinter(buf, options).visit(program)
    return buf.getvalue()


# =============================================================================
# JSON FORM
# =============================================================================

def node_to_dict(node) -> Dict[str, Any]:
    """Convert AST node to serializable dict."""
    loc = {'line': node.line, 'column': node.column}
    if isinstance(node, ProgramNode):
        return {'_type': 'program', 'filename': str(node.filename), **loc,
                'items': [node_to_dict(i) for i in node.items]}
    elif isinstance(node, SectionNode):
        return {'_type': 'section', 'name': node.name, **loc,
                'body': [node_to_dict(a) for a in node.body]}
    elif isinstance(node, AssignNode):
        return {'_type': 'assign', 'key': node.key, **loc, 'value': node_to_dict(node.value)}
    elif isinstance(node, EnumDefNode):
        return {'_type': 'enum', 'name': node.name, **loc,
                'entries': [node_to_dict(e) for e in node.entries]}
    elif isinstance(node, EnumEntry):
        return {'_type': 'enum_entry', 'name': node.name, 'value': node.value, **loc}
    elif isinstance(node, StructDefNode):
        return {'_type': 'struct', 'name': node.name, 'fields': list(node.fields), **loc}
    elif isinstance(node, NumberNode):
        return {'_type': 'number', 'value': node.value, 'text': node.text, **loc}
    elif isinstance(node, StringNode):
        return {'_type': 'string', 'value': node.value, **loc}
    elif isinstance(node, BoolNode):
        return {'_type': 'bool', 'value': node.value, **loc}
    elif isinstance(node, IdentNode):
        return {'_type': 'ident', 'name': node.name, **loc}
    elif isinstance(node, NullNode):
        return {'_type': 'null', **loc}
    elif isinstance(node, ListNode):
        return {'_type': 'list', **loc, 'items': [node_to_dict(i) for i in node.items]}
    elif isinstance(node, TupleNode):
        return {'_type': 'tuple', **loc, 'items': [node_to_dict(i) for i in node.items]}
    elif isinstance(node, ObjectNode):
        return {'_type': 'object', **loc, 'fields': [node_to_dict(f) for f in node.fields]}
    elif isinstance(node, ObjectField):
        return {'_type': 'field', 'key': node.key, **loc, 'value': node_to_dict(node.value)}
    raise TypeError(f"cannot serialize {type(node).__name__}")


def serialize_ast(ast: ProgramNode) -> bytes:
    """
    Serialize AST to JSON bytes.

    Args:
        ast: Parsed AST root node

    Returns:
        UTF-8 encoded JSON bytes
    """
    data = node_to_dict(ast)
    return json.dumps(data, separators=(',', ':')).encode('utf-8')


def deserialize_ast(data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Load the JSON form written by `serialize_ast` (or `brik compile --json`).

    The result stays in dict form; it is not rebuilt into nodes. Raises
    ValueError when the document is not JSON or its root is not a program.
    """
    if isinstance(data, bytes):
        data = data.decode('utf-8')
    tree = json.loads(data)
    if not isinstance(tree, dict) or tree.get('_type') != 'program':
        raise ValueError("not a serialized brik program")
    tree.setdefault('items', [])
    return tree


def count_ast_nodes(ast_dict: Dict[str, Any]) -> int:
    """
    Count nodes in a serialized AST.

    Args:
        ast_dict: Deserialized AST dictionary

    Returns:
        Total node count
    """
    count = 1
    for key in ('items', 'body', 'entries', 'fields', 'value'):
        if key in ast_dict:
            val = ast_dict[key]
            if isinstance(val, list):
                for item in val:
                    if isinstance(item, dict):
                        count += count_ast_nodes(item)
            elif isinstance(val, dict):
                count += count_ast_nodes(val)
    return count
