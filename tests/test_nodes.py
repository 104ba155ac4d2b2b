"""
Tests for the AST node model.
"""

import dataclasses

import pytest

from brik.parser import (
    parse_source,
    AssignNode,
    NumberNode,
    ListNode,
    NodeType,
    ProgramNode,
    SectionNode,
)


class TestNodeModel:

    def test_nodes_are_frozen(self):
        """Trees cannot be modified after parsing."""
        assign = parse_source("x = 1").items[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            assign.key = "y"

    def test_children_are_tuples(self):
        ast = parse_source("[s]\nxs = [1, 2]")
        assert isinstance(ast.items, tuple)
        assert isinstance(ast.items[0].body, tuple)
        assert isinstance(ast.items[0].body[0].value.items, tuple)

    def test_equality_ignores_location(self):
        """Structural equality does not depend on where a node was written."""
        a = parse_source("x = 3.5").items[0]
        b = parse_source("\n\n    x =    3.5").items[0]
        assert a == b
        assert a == AssignNode(key="x", value=NumberNode(value=3.5, text="3.5"))

    def test_node_type_tags(self):
        assert ProgramNode.node_type == NodeType.PROGRAM
        assert ListNode().node_type == NodeType.LIST

    def test_assignments_in_document_order(self):
        ast = parse_source("a = 1\n[s]\nb = 2\nc = 3\n[t]\nd = 4")
        assert [a.key for a in ast.assignments()] == ["a", "b", "c", "d"]

    def test_get_section_missing(self):
        assert ProgramNode(items=(SectionNode(name="a"),)).get_section("b") is None

    def test_keyword_construction(self):
        """Node fields are given by keyword; location is optional and ignored by ==."""
        node = NumberNode(value=3.5, text="3.5")
        assert node.value == 3.5
        assert (node.line, node.column) == (0, 0)
        assert NumberNode(value=3.5, text="3.5", line=4, column=2) == node
