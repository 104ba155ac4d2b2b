"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from brik.parser import parse_file, parse_source
from brik.parser.nodes import AssignNode, ProgramNode, SectionNode


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def tetris_path(fixtures_dir):
    """Path to the sample Tetris definition."""
    return fixtures_dir / "tetris.brik"


# =============================================================================
# PARSED AST FIXTURES
# =============================================================================

@pytest.fixture
def tetris_ast(tetris_path):
    """Parsed sample Tetris definition."""
    return parse_file(str(tetris_path))


@pytest.fixture
def board_ast():
    """A single section with two assignments."""
    return parse_source("[board]\nwidth = 10\nheight = 20\n")


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config into tmp_path and return its path."""
    def _write(content: str) -> Path:
        path = tmp_path / "brik.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_assignment_value(section: SectionNode, key: str):
    """Get the value of the last assignment named ``key`` within a section."""
    found = None
    for assign in section.body:
        if isinstance(assign, AssignNode) and assign.key == key:
            found = assign.value
    return found


def top_level_assignments(ast: ProgramNode) -> list:
    """Assignments that are not inside a section."""
    return [item for item in ast.items if isinstance(item, AssignNode)]
