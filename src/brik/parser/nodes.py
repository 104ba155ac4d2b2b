"""
Brik AST node types.

Two closed families: top-level items (section, assignment, enum and struct
definitions) and expressions. Nodes are frozen and hold tuples, so a tree
cannot be changed once the parser has built it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Tuple, Union


class NodeType(Enum):
    """Types of AST nodes."""
    PROGRAM = auto()
    SECTION = auto()        # [name] followed by assignments
    ASSIGN = auto()         # key = expr
    ENUM_DEF = auto()       # enum Name { A: 1, B: 2 }
    ENUM_ENTRY = auto()
    STRUCT_DEF = auto()     # struct Name { a, b = 0 }
    NUMBER = auto()
    STRING = auto()
    BOOL = auto()
    IDENT = auto()
    NULL = auto()
    LIST = auto()           # [a, b]
    TUPLE = auto()          # (a, b)
    OBJECT = auto()         # { a: 1, b: 2 }
    OBJECT_FIELD = auto()


@dataclass(frozen=True)
class ASTNode:
    """
    Base class for AST nodes.

    ``line`` and ``column`` are the first two dataclass fields, so subclass
    fields must be passed by keyword: ``NumberNode(value=3.5)``, not
    ``NumberNode(3.5)``.
    """
    node_type: ClassVar[NodeType]
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


# =============================================================================
# EXPRESSIONS
# =============================================================================

@dataclass(frozen=True)
class NumberNode(ASTNode):
    """A numeric literal; ``text`` keeps the source lexeme."""
    node_type: ClassVar[NodeType] = NodeType.NUMBER
    value: float = 0.0
    text: str = ""

    def __repr__(self):
        return f"Number({self.value!r})"


@dataclass(frozen=True)
class StringNode(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.STRING
    value: str = ""

    def __repr__(self):
        return f"String({self.value!r})"


@dataclass(frozen=True)
class BoolNode(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.BOOL
    value: bool = False

    def __repr__(self):
        return f"Bool({self.value})"


@dataclass(frozen=True)
class IdentNode(ASTNode):
    """A bare identifier used as a value, e.g. a symbolic color name."""
    node_type: ClassVar[NodeType] = NodeType.IDENT
    name: str = ""

    def __repr__(self):
        return f"Ident({self.name})"


@dataclass(frozen=True)
class NullNode(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.NULL

    def __repr__(self):
        return "Null()"


@dataclass(frozen=True)
class ListNode(ASTNode):
    """A bracketed sequence: [item1, item2]"""
    node_type: ClassVar[NodeType] = NodeType.LIST
    items: Tuple["Expr", ...] = ()

    def __repr__(self):
        return f"List({list(self.items)})"


@dataclass(frozen=True)
class TupleNode(ASTNode):
    """A parenthesized sequence: (item1, item2)"""
    node_type: ClassVar[NodeType] = NodeType.TUPLE
    items: Tuple["Expr", ...] = ()

    def __repr__(self):
        return f"Tuple({list(self.items)})"


@dataclass(frozen=True)
class ObjectField(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.OBJECT_FIELD
    key: str = ""
    value: "Expr" = None

    def __repr__(self):
        return f"Field({self.key}: {self.value})"


@dataclass(frozen=True)
class ObjectNode(ASTNode):
    """An inline object: { key: value, ... }. Duplicate keys are kept in order."""
    node_type: ClassVar[NodeType] = NodeType.OBJECT
    fields: Tuple[ObjectField, ...] = ()

    def __repr__(self):
        return f"Object({list(self.fields)})"

    def get(self, key: str) -> "Expr":
        """Return the value of the last field named ``key``, or None."""
        found = None
        for f in self.fields:
            if f.key == key:
                found = f.value
        return found


Expr = Union[NumberNode, StringNode, BoolNode, IdentNode, NullNode, ListNode, TupleNode, ObjectNode]


# =============================================================================
# ITEMS
# =============================================================================

@dataclass(frozen=True)
class AssignNode(ASTNode):
    """A key = value assignment."""
    node_type: ClassVar[NodeType] = NodeType.ASSIGN
    key: str = ""
    value: Expr = None

    def __repr__(self):
        return f"Assign({self.key} = {self.value})"


@dataclass(frozen=True)
class SectionNode(ASTNode):
    """A named section: [name] followed by its assignments."""
    node_type: ClassVar[NodeType] = NodeType.SECTION
    name: str = ""
    body: Tuple[AssignNode, ...] = ()

    def __repr__(self):
        return f"Section({self.name}, {len(self.body)} entries)"


@dataclass(frozen=True)
class EnumEntry(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.ENUM_ENTRY
    name: str = ""
    value: float = 0.0

    def __repr__(self):
        return f"Entry({self.name}: {self.value!r})"


@dataclass(frozen=True)
class EnumDefNode(ASTNode):
    """enum Name { KEY: number, ... }"""
    node_type: ClassVar[NodeType] = NodeType.ENUM_DEF
    name: str = ""
    entries: Tuple[EnumEntry, ...] = ()

    def __repr__(self):
        return f"EnumDef({self.name}, {list(self.entries)})"


@dataclass(frozen=True)
class StructDefNode(ASTNode):
    """struct Name { field, field = default, ... }. Defaults are not kept."""
    node_type: ClassVar[NodeType] = NodeType.STRUCT_DEF
    name: str = ""
    fields: Tuple[str, ...] = ()

    def __repr__(self):
        return f"StructDef({self.name}, {list(self.fields)})"


Item = Union[SectionNode, AssignNode, EnumDefNode, StructDefNode]


@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """Root of the AST, contains all top-level items in declaration order."""
    node_type: ClassVar[NodeType] = NodeType.PROGRAM
    items: Tuple[Item, ...] = ()
    filename: str = "<unknown>"

    def __repr__(self):
        return f"Program({self.filename}, {len(self.items)} items)"

    def get_sections(self, name: str = None) -> Tuple[SectionNode, ...]:
        """Get all sections, optionally filtered by exact name."""
        return tuple(
            i for i in self.items
            if isinstance(i, SectionNode) and (name is None or i.name == name)
        )

    def get_section(self, name: str) -> SectionNode:
        """Get the first section with the given name, or None."""
        for item in self.items:
            if isinstance(item, SectionNode) and item.name == name:
                return item
        return None

    def assignments(self) -> Tuple[AssignNode, ...]:
        """All assignments, top-level and section-scoped, in document order."""
        result = []
        for item in self.items:
            if isinstance(item, AssignNode):
                result.append(item)
            elif isinstance(item, SectionNode):
                result.extend(item.body)
        return tuple(result)
