"""
Parenthesized rendering of expression trees, for debugging and tests.

    1 + 2 * 3    ->  (+ 1 (* 2 3))
    -(1)         ->  (- (group 1))
"""

from loxpy.compiler.ast_nodes import (
    Binary,
    Expression,
    ExpressionVisitor,
    Grouping,
    Literal,
    Unary,
)
from loxpy.runtime.values import stringify


class AstPrinter(ExpressionVisitor[str]):
    """Renders an expression as a Lisp-like string."""

    def print(self, expr: Expression) -> str:
        return self.visit(expr)

    def visit_literal(self, node: Literal) -> str:
        return stringify(node.value)

    def visit_grouping(self, node: Grouping) -> str:
        return self._parenthesize("group", node.expression)

    def visit_unary(self, node: Unary) -> str:
        return self._parenthesize(node.operator.lexeme or "", node.right)

    def visit_binary(self, node: Binary) -> str:
        return self._parenthesize(node.operator.lexeme or "", node.left, node.right)

    def _parenthesize(self, name: str, *expressions: Expression) -> str:
        parts = [name]
        parts.extend(self.visit(expr) for expr in expressions)
        return f"({' '.join(parts)})"


def print_ast(expr: Expression) -> str:
    """Convenience function to render an expression tree."""
    return AstPrinter().print(expr)
