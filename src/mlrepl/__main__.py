#!/usr/bin/env python3
"""mlrepl CLI - Command-line interface for the mlrepl language.

Usage:
    mlrepl                              # Start the interactive REPL
    mlrepl <file.ml>                    # Run a program, then start the REPL
    mlrepl <file.ml> --eval             # Evaluate and show the result
    mlrepl <file.ml> --compile          # Show the compiled Python expression
    mlrepl <file.ml> --lark             # Show Lark parse tree
    mlrepl "1 + 2" --text --eval        # Treat source as program text
"""

import argparse
import logging
import sys
from pathlib import Path

from lark import Token
from rich.console import Console

import mlrepl
from mlrepl import repl


def tree_lines(node, show_positions=False, depth=0):
    """Yield an indented outline of a lark parse tree, one node per line.

    Empty optional children of a rule are skipped.
    """
    prefix = "  " * depth
    if isinstance(node, Token):
        where = f" @{node.line}:{node.column}" if show_positions else ""
        yield f"{prefix}{node.type} {node.value!r}{where}"
        return

    meta = node.meta
    where = f" @{meta.line}:{meta.column}" if show_positions and not meta.empty else ""
    yield f"{prefix}{node.data}{where}"
    for child in node.children:
        if child is not None:
            yield from tree_lines(child, show_positions, depth + 1)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mlrepl",
        description="Compile, evaluate and print programs interactively")
    parser.add_argument("source", nargs="?",
        help="Program file to run before the REPL starts")
    parser.add_argument("--text", action="store_true",
        help="Treat source as program text instead of a file path")
    parser.add_argument("--lark", action="store_true",
        help="Show Lark parse tree")
    parser.add_argument("--pos", action="store_true",
        help="Show line:column positions in the parse tree")
    parser.add_argument("--compile", action="store_true",
        help="Show the compiled Python expression")
    parser.add_argument("--eval", action="store_true",
        help="Evaluate the program and show the result")
    parser.add_argument("--no-color", action="store_true",
        help="Disable colored output")
    parser.add_argument("--log-level", default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging threshold (default: warning)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s")

    source = None
    if args.text:
        if args.source is None:
            parser.error("--text requires program text")
        source = args.source
    elif args.source is not None:
        filepath = Path(args.source)
        if not filepath.exists():
            print(f"Error: File not found: {filepath}", file=sys.stderr)
            return 1
        source = filepath.read_text(encoding="utf-8")

    modes = [args.lark, args.compile, args.eval]
    if sum(modes) > 1:
        parser.error("--lark, --compile and --eval cannot be combined")
    if any(modes) and source is None:
        parser.error("an output mode needs a source")

    if args.lark:
        try:
            for line in tree_lines(mlrepl.parse_tree(source), args.pos):
                print(line)
        except mlrepl.ParseError as e:
            print(e, file=sys.stderr)
            return 1
        return 0

    if args.compile:
        try:
            print(mlrepl.compile_program(source))
        except mlrepl.CompileError as e:
            print(e, file=sys.stderr)
            return 1
        return 0

    if args.eval:
        driver = mlrepl.ReplDriver(mlrepl.Session())
        result = driver.execute(source)
        print(result.message, file=sys.stdout if result.success else sys.stderr)
        return 0 if result.success else 1

    console = Console(theme=mlrepl.create_theme(), no_color=args.no_color)
    driver = repl.create_driver(console)
    if source is not None:
        driver.recompile_all(source)
    repl.repl(driver)
    return 0


if __name__ == "__main__":
    sys.exit(main())
