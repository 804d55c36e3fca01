"""
loxpy Command-Line Interface.

Runs Lox expressions from files or the command line.

Usage:
    loxpy run input.lox             # Evaluate a file and print the result
    loxpy eval "1 + 2 * 3"          # Evaluate an expression string
    loxpy tokens input.lox          # Dump the token stream
    loxpy ast input.lox             # Print the parenthesized tree
    loxpy repl                      # Interactive mode
    loxpy -s input.lox              # Same as "run"; with no file, start the REPL

Exit status: 0 on success, 65 for a scan or parse error, 70 for a runtime
error and 1 when the input file cannot be read.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from loxpy import __version__
from loxpy.compiler import RunResult, run_source
from loxpy.compiler.ast_printer import print_ast
from loxpy.compiler.lexer import Lexer
from loxpy.compiler.parser import Parser
from loxpy.utils.colors import ANSI_CODES, supports_color
from loxpy.utils.diagnostics import diagnostic_from_error
from loxpy.utils.errors import ErrorKind, LoxError, ScanError

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_DATA_ERROR = 65
EXIT_RUNTIME_ERROR = 70

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("loxpy")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="loxpy",
        description="loxpy - scanner, parser and evaluator for Lox expressions",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-s",
        "--source",
        "--src",
        dest="source",
        type=Path,
        help="Path to a Lox source file to run (starts the REPL when omitted)",
    )
    parser.add_argument(
        "--columns",
        action="store_true",
        help="Include column numbers in error reports",
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Render errors as diagnostics with source context",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Evaluate a Lox source file")
    run_parser.add_argument("input", type=Path, help="Input .lox file")

    eval_parser = subparsers.add_parser("eval", help="Evaluate an expression string")
    eval_parser.add_argument("expression", help="Lox expression")

    tokens_parser = subparsers.add_parser("tokens", help="Show the token stream (debug)")
    tokens_parser.add_argument("input", type=Path, help="Input .lox file")

    ast_parser = subparsers.add_parser("ast", help="Show the expression tree (debug)")
    ast_parser.add_argument("input", type=Path, help="Input .lox file")

    subparsers.add_parser("repl", help="Start the interactive prompt")

    return parser


# =============================================================================
# Helpers
# =============================================================================


def _read_source(input_path: Path) -> Optional[str]:
    """Read a UTF-8 source file, reporting any failure on stderr."""
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return None
    try:
        return input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {input_path}: {e}", file=sys.stderr)
        return None


def _report_error(error: LoxError, source: str, args: argparse.Namespace) -> None:
    """Print an error to stderr in the format the flags ask for."""
    use_color = supports_color(sys.stderr)
    if args.diagnostics:
        diagnostic = diagnostic_from_error(error)
        print(diagnostic.render(source, use_color=use_color), file=sys.stderr)
        return

    message = error.format(with_column=args.columns)
    if use_color:
        message = f"{ANSI_CODES['RED']}{message}{ANSI_CODES['RESET']}"
    print(message, file=sys.stderr)


def _exit_code_for(error: LoxError) -> int:
    if error.kind == ErrorKind.RUNTIME:
        return EXIT_RUNTIME_ERROR
    return EXIT_DATA_ERROR


def _finish(result: RunResult, args: argparse.Namespace) -> int:
    """Print a pipeline result and map it to an exit status."""
    if result.error is not None:
        _report_error(result.error, result.source, args)
        return _exit_code_for(result.error)

    print(result.display)
    return EXIT_OK


# =============================================================================
# Commands
# =============================================================================


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the run command."""
    input_path: Path = args.input
    source = _read_source(input_path)
    if source is None:
        return EXIT_IO_ERROR

    return _finish(run_source(source, str(input_path)), args)


def cmd_eval(args: argparse.Namespace) -> int:
    """Handle the eval command."""
    return _finish(run_source(args.expression), args)


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command (debug)."""
    input_path: Path = args.input
    source = _read_source(input_path)
    if source is None:
        return EXIT_IO_ERROR

    try:
        tokens = Lexer(source, str(input_path)).tokenize()
    except ScanError as e:
        _report_error(e, source, args)
        return EXIT_DATA_ERROR

    for token in tokens:
        print(f"{token.line:4}  {token}")

    return EXIT_OK


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command (debug)."""
    input_path: Path = args.input
    source = _read_source(input_path)
    if source is None:
        return EXIT_IO_ERROR

    try:
        tokens = Lexer(source, str(input_path)).tokenize()
    except ScanError as e:
        _report_error(e, source, args)
        return EXIT_DATA_ERROR

    parser = Parser(tokens)
    expression = parser.parse()
    if expression is None:
        _report_error(parser.errors[0], source, args)
        return EXIT_DATA_ERROR

    print(print_ast(expression))
    return EXIT_OK


def cmd_repl(args: argparse.Namespace) -> int:
    """Handle the repl command."""
    from loxpy.repl import REPLSession

    session = REPLSession(with_column=args.columns)
    session.run()
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format=LOG_FORMAT)
    logger.debug(f"loxpy {__version__}, command: {args.command or 'default'}")

    if args.command is None:
        if args.source is not None:
            args.input = args.source
            return cmd_run(args)
        return cmd_repl(args)

    command_handlers = {
        "run": cmd_run,
        "eval": cmd_eval,
        "tokens": cmd_tokens,
        "ast": cmd_ast,
        "repl": cmd_repl,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
