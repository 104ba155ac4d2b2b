"""
CLI entry point for brik.

Usage:
    brik tokens <file>                 Show a token summary (tokens-only mode)
    brik parse <file>                  Parse a file and show AST summary
    brik compile <file>                Write the canonical tree (build/arbol.ast)
    brik init-config [path]            Write a starter YAML config

<file> may also be a bundled game shortcut: tetris (t) or snake (s).
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from brik import __version__
from brik.config import ConfigError, check_log_level, get_config, write_default_config
from brik.parser import (
    BrikSyntaxError,
    Lexer,
    SerializeOptions,
    TokenType,
    parse_file,
    read_source,
    serialize,
    serialize_ast,
    deserialize_ast,
    count_ast_nodes,
)
from brik.parser.ast_serde import node_to_dict

logger = logging.getLogger(__name__)


# Bundled game definitions, relative to the working directory
GAME_SHORTCUTS = {
    'tetris': 'config/games/Tetris.brik',
    't': 'config/games/Tetris.brik',
    'snake': 'config/games/Snake.brik',
    's': 'config/games/Snake.brik',
}


def resolve_source(name: str) -> str:
    """Map a game shortcut to its bundled file; anything else is a path."""
    shortcut = GAME_SHORTCUTS.get(name.lower())
    if shortcut and not Path(name).exists():
        logger.info("Using bundled game file %s", shortcut)
        return shortcut
    return name


def _item_label(item: dict) -> str:
    name = item.get('name') or item.get('key')
    return f"{item.get('_type')} {name}"


def cmd_tokens(args, config):
    """Tokenize a file and show counts per kind plus the first tokens."""
    path = resolve_source(args.file)
    source = read_source(path, tuple(config.source_encodings))
    tokens = [t for t in Lexer(source, path).tokenize() if t.type != TokenType.EOF]

    print(f"Total tokens: {len(tokens)}")
    print("\nToken kinds:")
    counts = Counter(t.type.name for t in tokens)
    for kind in sorted(counts):
        print(f"  {kind}: {counts[kind]}")

    limit = args.limit if args.limit is not None else config.token_preview
    print(f"\nFirst {min(limit, len(tokens))} tokens:")
    for token in tokens[:limit]:
        print(f'{token.type.name}("{token.value}")')

    return 0


def cmd_parse(args, config):
    """Parse a file, or load a `compile --json` tree, and show a summary."""
    path = resolve_source(args.file)
    if path.endswith('.json'):
        tree = deserialize_ast(Path(path).read_bytes())
    else:
        tree = node_to_dict(parse_file(path, tuple(config.source_encodings)))
    items = tree['items']

    print(f"Parsed: {path}")
    print(f"Top-level items: {len(items)}")

    if args.verbose:
        print(f"AST nodes: {count_ast_nodes(tree)}")
        for item in items[:20]:
            print(f"  - {_item_label(item)}")
        if len(items) > 20:
            print(f"  ... and {len(items) - 20} more")

    return 0


def cmd_compile(args, config):
    """Parse a file and write its canonical tree."""
    program = parse_file(resolve_source(args.file), tuple(config.source_encodings))
    options = SerializeOptions(indent_size=config.indent_size)

    if args.stdout:
        if args.json:
            print(serialize_ast(program).decode('utf-8'))
        else:
            serialize(program, sys.stdout, options)
        return 0

    out_path = Path(args.output) if args.output else config.output_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if args.json:
        out_path.write_bytes(serialize_ast(program))
    else:
        serialize(program, out_path, options)

    logger.info("Wrote %d top-level items to %s", len(program.items), out_path)
    print(f"Tree written to {out_path}")
    return 0


def cmd_init_config(args, config):
    """Write a commented starter config file."""
    path = Path(args.path) if args.path else None
    target = path or Path.home() / ".brik" / "brik_config.yaml"
    if target.exists() and not args.force:
        raise FileExistsError(f"{target} already exists (use --force to overwrite)")
    written = write_default_config(target)
    print(f"Config written to {written}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='brik',
        description="Brick engine configuration compiler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    brik tokens config/games/Tetris.brik
    brik parse config/games/Snake.brik -v
    brik compile config/games/Tetris.brik -o build/arbol.ast
    brik compile t --stdout
    brik init-config brik.yaml
"""
    )
    parser.add_argument('--version', action='version', version=f'brik {__version__}')
    parser.add_argument('--config', help='Path to a brik YAML config file')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ERROR or CRITICAL')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # tokens
    tokens_p = subparsers.add_parser('tokens', help='Show the token stream of a file')
    tokens_p.add_argument('file', help='File to tokenize')
    tokens_p.add_argument('-n', '--limit', type=int, help='Number of tokens to list')
    tokens_p.set_defaults(func=cmd_tokens)

    # parse
    parse_p = subparsers.add_parser('parse', help='Parse a brik file')
    parse_p.add_argument('file', help='File to parse')
    parse_p.add_argument('-v', '--verbose', action='store_true')
    parse_p.set_defaults(func=cmd_parse)

    # compile
    compile_p = subparsers.add_parser('compile', help='Write the canonical tree of a file')
    compile_p.add_argument('file', help='File to compile')
    compile_p.add_argument('-o', '--output', help='Output path (default from config)')
    compile_p.add_argument('--json', action='store_true', help='Write the JSON form instead')
    compile_p.add_argument('--stdout', action='store_true', help='Print instead of writing a file')
    compile_p.set_defaults(func=cmd_compile)

    # init-config
    init_p = subparsers.add_parser('init-config', help='Write a starter YAML config')
    init_p.add_argument('path', nargs='?', help='Destination (default ~/.brik/brik_config.yaml)')
    init_p.add_argument('--force', action='store_true', help='Overwrite an existing file')
    init_p.set_defaults(func=cmd_init_config)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config(Path(args.config) if args.config else None)
        config.validate()
        level = check_log_level(args.log_level) if args.log_level else config.log_level
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 3

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args, config)
    except BrikSyntaxError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 2
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 3
    except ValueError as e:
        # undecodable source text or a malformed JSON tree
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
