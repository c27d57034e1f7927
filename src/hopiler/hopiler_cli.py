"""
HoPiler CLI Entrypoint.

This module provides the command-line interface for checking HoPiler source files.

Features:
    - Read source from a `.ho` file.
    - Tokenize and parse it, logging the token stream and tree at DEBUG level.
    - Report lex and parse failures on stderr with a non-zero exit code.

Example usage:
    hopiler hello.ho

Exit codes:
    0: The tokenizer and parser ran to completion.
    1: Wrong number of arguments, unreadable file, or a fatal lex/parse error.

Functions:
    read_source(path: str) -> str:
        Reads a whole source file into one string.

    run_hopiler(path: str) -> ASTNode:
        Executes the full HoPiler pipeline (read → tokenize → parse).

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and runs the pipeline.
"""

import argparse
import logging
import sys
from typing import NoReturn

from hopiler.hopiler_ast import ASTNode
from hopiler.hopiler_constants import SOURCE_SUFFIX
from hopiler.hopiler_errors import HopilerError, TypeMismatch
from hopiler.hopiler_lexer import Lexer
from hopiler.hopiler_parser import Parser

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(
            1,
            f"{self.prog}: error: {message}\n"
            "HoPiler failed. No source code given! Include the filename like:\n"
            f"{self.prog} fileName{SOURCE_SUFFIX}\n",
        )


def read_source(path: str) -> str:
    """
    Read a HoPiler source file.

    Args:
        path (str): Path to the source file; the `.ho` suffix is expected but not required.

    Returns:
        str: The whole file, with `\\r\\n` line endings normalized to `\\n`. Bytes that
        are not valid UTF-8 are replaced with U+FFFD.

    Raises:
        OSError: If the file cannot be read.
    """
    if not path.endswith(SOURCE_SUFFIX):
        logger.warning("%s does not have the %s suffix", path, SOURCE_SUFFIX)
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def run_hopiler(path: str) -> ASTNode:
    """
    Run the HoPiler front end on one file.

    Args:
        path (str): Path to the `.ho` source file.

    Returns:
        ASTNode: The root of the parsed tree.

    Raises:
        OSError: If the file cannot be read.
        HopilerError: On a fatal lex or parse error.
    """
    source = read_source(path)

    lexer = Lexer(source)
    tokens = lexer.tokenize()
    if logger.isEnabledFor(logging.DEBUG):
        for tok in tokens:
            logger.debug("token %d:%d %r", tok.line, tok.col, tok)

    root = Parser(tokens).parse()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tree:\n%s", root.pretty())
    return root


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="hopiler", add_help=False)
    parser.add_argument("source", help=f"Path to a {SOURCE_SUFFIX} source file")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the HoPiler CLI.

    Args:
        argv (list[str] | None): Arguments without the program name; defaults to `sys.argv[1:]`.

    Returns:
        int: The process exit code.
    """
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)
    try:
        args = build_arg_parser().parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    try:
        run_hopiler(args.source)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.source, exc)
        return 1
    except TypeMismatch:
        # already reported by the parser
        return 1
    except HopilerError as exc:
        logger.error("Issue with compiling: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
