"""
Lox Interactive REPL (Read-Eval-Print Loop).

Each input line is scanned, parsed and evaluated as one expression and the
result is printed. Errors are reported and the session keeps going.

Usage:
    loxpy repl
    loxpy

Example session:
    > 1 + 2 * 3
    7
    > "a" + "b"
    ab
    > :ast -(1 + 2)
    (- (group (+ 1 2)))
    > q
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

try:
    import readline

    HAS_READLINE = True
except ImportError:
    # readline not available on some platforms (e.g., Windows)
    HAS_READLINE = False

from loxpy import __version__
from loxpy.compiler import run_source
from loxpy.compiler.ast_printer import print_ast
from loxpy.compiler.interpreter import Interpreter
from loxpy.compiler.lexer import Lexer
from loxpy.compiler.parser import Parser
from loxpy.utils.colors import Colors
from loxpy.utils.errors import LoxError, ScanError

logger = logging.getLogger(__name__)

HISTORY_FILE = Path.home() / ".loxpy_history"
QUIT_INPUT = "q"


# =============================================================================
# REPL Commands
# =============================================================================


@dataclass
class REPLCommand:
    """A REPL command definition."""

    name: str
    aliases: tuple[str, ...] = ()
    help_text: str = ""
    handler: Optional[Callable[["REPLSession", str], Optional[str]]] = None


# =============================================================================
# REPL Session
# =============================================================================


class REPLSession:
    """
    Interactive REPL session for Lox expressions.

    There is no state carried between lines beyond the input history; each
    line is a complete program.
    """

    def __init__(self, with_column: bool = False) -> None:
        """
        Initialize a new REPL session.

        Args:
            with_column: Include column numbers in error reports
        """
        self.with_column = with_column
        self.history: list[str] = []
        self.running = True
        self.prompt = "> "

        self._interpreter = Interpreter()
        self._commands = self._setup_commands()

    def _setup_commands(self) -> dict[str, REPLCommand]:
        """Setup REPL commands."""
        commands = {
            "help": REPLCommand(
                name="help",
                aliases=("h", "?"),
                help_text="Show this help message",
                handler=self._cmd_help,
            ),
            "quit": REPLCommand(
                name="quit",
                aliases=("q", "exit"),
                help_text="Exit the REPL",
                handler=self._cmd_quit,
            ),
            "tokens": REPLCommand(
                name="tokens",
                aliases=("t",),
                help_text="Show the tokens of an expression",
                handler=self._cmd_tokens,
            ),
            "ast": REPLCommand(
                name="ast",
                aliases=(),
                help_text="Show the tree of an expression",
                handler=self._cmd_ast,
            ),
        }

        alias_map = {}
        for cmd in commands.values():
            alias_map[cmd.name] = cmd
            for alias in cmd.aliases:
                alias_map[alias] = cmd

        return alias_map

    # -------------------------------------------------------------------------
    # Command Handlers
    # -------------------------------------------------------------------------

    def _cmd_help(self, session: "REPLSession", args: str) -> str:
        """Show help message."""
        lines = [
            f"{Colors.BOLD}Commands:{Colors.RESET}",
            f"  {Colors.CYAN}:help{Colors.RESET}            Show this help",
            f"  {Colors.CYAN}:quit, :q, q{Colors.RESET}     Exit REPL",
            f"  {Colors.CYAN}:tokens <expr>{Colors.RESET}   Show tokens of expression",
            f"  {Colors.CYAN}:ast <expr>{Colors.RESET}      Show tree of expression",
            "",
            f"{Colors.BOLD}Expressions:{Colors.RESET}",
            f"  {Colors.GREEN}1 + 2 * 3{Colors.RESET}             Arithmetic",
            f'  {Colors.GREEN}"lo" + "x"{Colors.RESET}            String concatenation',
            f"  {Colors.GREEN}!(1 >= 2) == true{Colors.RESET}     Comparison and equality",
        ]
        return "\n".join(lines)

    def _cmd_quit(self, session: "REPLSession", args: str) -> str:
        """Exit the REPL."""
        self.running = False
        return f"{Colors.DIM}Goodbye!{Colors.RESET}"

    def _cmd_tokens(self, session: "REPLSession", args: str) -> str:
        """Show the token stream of an expression."""
        if not args:
            return f"{Colors.YELLOW}Usage: :tokens <expression>{Colors.RESET}"

        try:
            tokens = Lexer(args).tokenize()
        except ScanError as e:
            return self._format_error(e)

        return "\n".join(str(token) for token in tokens)

    def _cmd_ast(self, session: "REPLSession", args: str) -> str:
        """Show the parenthesized tree of an expression."""
        if not args:
            return f"{Colors.YELLOW}Usage: :ast <expression>{Colors.RESET}"

        try:
            tokens = Lexer(args).tokenize()
        except ScanError as e:
            return self._format_error(e)

        parser = Parser(tokens)
        expression = parser.parse()
        if expression is None:
            return self._format_error(parser.errors[0])

        return print_ast(expression)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _format_error(self, error: LoxError) -> str:
        return f"{Colors.RED}{error.format(with_column=self.with_column)}{Colors.RESET}"

    def eval_line(self, line: str) -> Optional[str]:
        """
        Evaluate a single line of input.

        Returns the result string or None if no output.
        """
        line = line.strip()
        if not line:
            return None

        if line == QUIT_INPUT:
            return self._cmd_quit(self, "")

        if line.startswith(":"):
            return self._handle_command(line)

        result = run_source(line, interpreter=self._interpreter)
        if result.error is not None:
            return self._format_error(result.error)
        return result.display

    def _handle_command(self, cmd: str) -> str:
        """Handle a REPL command."""
        parts = cmd[1:].split(maxsplit=1)
        command_name = parts[0].lower() if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        if command_name in self._commands:
            cmd_obj = self._commands[command_name]
            if cmd_obj.handler:
                return cmd_obj.handler(self, args) or ""
            return f"{Colors.YELLOW}Command not implemented: {command_name}{Colors.RESET}"

        return f"{Colors.RED}Unknown command: :{command_name}{Colors.RESET}\nType :help for available commands"

    # -------------------------------------------------------------------------
    # Main Loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Main REPL loop."""
        print(f"{Colors.BOLD}loxpy {__version__}{Colors.RESET} - Interactive Mode")
        print(
            f"Type {Colors.CYAN}:help{Colors.RESET} for help, {Colors.CYAN}{QUIT_INPUT}{Colors.RESET} to exit"
        )
        print()

        if HAS_READLINE:
            try:
                if HISTORY_FILE.exists():
                    readline.read_history_file(str(HISTORY_FILE))
            except OSError as e:
                logger.debug(f"Could not read history file: {e}")

        try:
            while self.running:
                try:
                    line = input(self.prompt)
                    self.history.append(line)

                    result = self.eval_line(line)
                    if result:
                        print(result)

                except KeyboardInterrupt:
                    print(f"\n{Colors.DIM}Type {QUIT_INPUT} to exit{Colors.RESET}")
                except EOFError:
                    print(f"\n{Colors.DIM}Goodbye!{Colors.RESET}")
                    break

        finally:
            if HAS_READLINE:
                try:
                    readline.set_history_length(1000)
                    readline.write_history_file(str(HISTORY_FILE))
                except OSError as e:
                    logger.debug(f"Could not write history file: {e}")


def main() -> int:
    """Entry point for the REPL."""
    session = REPLSession()
    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
