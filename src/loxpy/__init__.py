"""
loxpy - The expression front end of the Lox language.

Scans source text into tokens, parses tokens into an expression tree by
recursive descent, and evaluates the tree to a literal value.
"""

from loxpy.compiler import RunResult, run_source
from loxpy.compiler.interpreter import Interpreter
from loxpy.compiler.lexer import Lexer
from loxpy.compiler.parser import Parser
from loxpy.utils.errors import LoxError

__version__ = "0.1.0"
__all__ = [
    "run_source",
    "RunResult",
    "Lexer",
    "Parser",
    "Interpreter",
    "LoxError",
]
