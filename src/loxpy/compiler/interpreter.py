"""
Tree-walking evaluator for Lox expressions.

Walks an expression tree once and produces a literal value. Operand types are
checked as the tree is walked; a violation raises LoxRuntimeError carrying the
operator token.
"""

import logging
from typing import Callable, Optional

from loxpy.compiler.ast_nodes import (
    Binary,
    Expression,
    ExpressionVisitor,
    Grouping,
    Literal,
    Unary,
)
from loxpy.compiler.tokens import Token, TokenType
from loxpy.runtime.values import (
    LiteralValue,
    divide,
    is_equal,
    is_number,
    is_string,
    is_truthy,
    stringify,
)
from loxpy.utils.errors import LoxRuntimeError

logger = logging.getLogger(__name__)

TraceHook = Callable[[Expression, LiteralValue], None]

OPERAND_NOT_NUMBER = "Operand must be a number"
OPERANDS_NOT_NUMBERS_OR_STRINGS = "Operands must be two numbers or two strings."


def _check_number_operand(operator: Token, operand: LiteralValue) -> None:
    if not is_number(operand):
        raise LoxRuntimeError(operator, OPERAND_NOT_NUMBER)


class Interpreter(ExpressionVisitor[LiteralValue]):
    """
    Evaluates expression trees.

    Binary operands are evaluated right first, then left.

    Usage:
        interpreter = Interpreter()
        value = interpreter.evaluate(expr)    # raw value
        text = interpreter.interpret(expr)    # display string
    """

    def __init__(self, trace: Optional[TraceHook] = None) -> None:
        """
        Initialize the interpreter.

        Args:
            trace: Optional callback invoked with each node and its value,
                in the order nodes finish evaluating
        """
        self._trace = trace

    def interpret(self, expr: Expression) -> str:
        """Evaluate an expression and render the result for display."""
        return stringify(self.evaluate(expr))

    def evaluate(self, expr: Expression) -> LiteralValue:
        value = self.visit(expr)
        if self._trace is not None:
            self._trace(expr, value)
        return value

    def visit_literal(self, node: Literal) -> LiteralValue:
        return node.value

    def visit_grouping(self, node: Grouping) -> LiteralValue:
        return self.evaluate(node.expression)

    def visit_unary(self, node: Unary) -> LiteralValue:
        right = self.evaluate(node.right)
        operator = node.operator

        if operator.type == TokenType.BANG:
            return not is_truthy(right)

        if operator.type == TokenType.MINUS:
            _check_number_operand(operator, right)
            return -right

        logger.warning(f"Unary operator {operator.type.name} has no evaluation rule; yielding nil")
        return None

    def visit_binary(self, node: Binary) -> LiteralValue:
        right = self.evaluate(node.right)
        left = self.evaluate(node.left)
        operator = node.operator
        op = operator.type

        if left is None or right is None or isinstance(left, bool) or isinstance(right, bool):
            raise LoxRuntimeError(operator, OPERANDS_NOT_NUMBERS_OR_STRINGS)

        # Operators defined for both strings and numbers
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        if op == TokenType.PLUS and is_string(left) and is_string(right):
            return left + right

        _check_number_operand(operator, left)
        _check_number_operand(operator, right)

        # Number-only operators
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.SLASH:
            return divide(left, right)
        if op == TokenType.STAR:
            return left * right
        if op == TokenType.GREATER:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right
        if op == TokenType.PLUS:
            return left + right

        logger.warning(f"Binary operator {op.name} has no evaluation rule; yielding nil")
        return None


def evaluate(expr: Expression) -> LiteralValue:
    """Convenience function to evaluate an expression tree."""
    return Interpreter().evaluate(expr)
