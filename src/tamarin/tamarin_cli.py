"""
Tamarin CLI Entrypoint.

This module provides the command-line interface for the Tamarin front end.

Features:
    - Read source from `.tam` files or inline strings.
    - Print the canonical (fully parenthesized) form of the parsed program.
    - Dump the token stream or the AST as JSON instead.
    - Launch the interactive REPL.

Example usage:
    tamarin hello.tam
    tamarin -s "let x = 1 + 2 * 3;"
    tamarin -s "a + b" --tokens
    tamarin prog.tam --json
    tamarin --repl

Environment:
    TAMARIN_LOG_LEVEL: default logging level when `--log-level` is not given.
"""

import argparse
import json
import logging
import os
import sys

from tamarin.tamarin_lexer import CharacterStream, Lexer, tokenize
from tamarin.tamarin_parser import Parser

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".tam"


def read_source(source: str, is_string: bool) -> str:
    """Return the program text, reading it from disk unless `is_string` is set.

    Raises:
        ValueError: If `source` is a path that does not end with `.tam`.
    """
    if is_string:
        return source
    if not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    with open(source, encoding="utf-8") as f:
        return f.read()


def run_tamarin(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the Tamarin front end over `source` and print the result.

    Args:
        source (str): Tamarin source code or path to a `.tam` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, print the token stream and stop.
        as_json (bool): If True, print the AST as JSON instead of its canonical form.

    Returns:
        int: 0 on a clean parse, 1 if any diagnostics were produced.
    """
    text = read_source(source, is_string)
    logger.debug("read %d characters of source", len(text))

    if tokens:
        for tok in tokenize(text):
            print(repr(tok))
        return 0

    parser = Parser(Lexer(CharacterStream(text)))
    program = parser.parse_program()

    if parser.diagnostics:
        for diag in parser.diagnostics:
            print(f"{diag.location()}: {diag.message}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)
    return 0


def configure_logging(level: str | None) -> None:
    name = (level or os.environ.get("TAMARIN_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tamarin")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of parsing"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Logging level (default: $TAMARIN_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Tamarin CLI.

    Launches the REPL when no source is given or `--repl` is passed; otherwise
    parses the source and returns the exit status.
    """
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.repl or args.source is None:
        from tamarin.tamarin_repl import start_repl

        start_repl()
        return 0

    return run_tamarin(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        as_json=args.as_json,
    )


if __name__ == "__main__":
    sys.exit(main())
