"""
brik - Brick engine configuration compiler

Parses .brik game definition files and writes the canonical tree that the
game runtimes read back.
"""

__version__ = "0.1.0"
__author__ = "brik contributors"

from brik.parser import parse_file, parse_source, serialize
