"""
Abstract Syntax Tree (AST) node definitions for Lox expressions.

The expression tree is a closed set of four immutable node types. Nodes are
built bottom-up by the parser, each child is owned by exactly one parent, and
two trees are equal when their structure is equal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from loxpy.compiler.tokens import Token
from loxpy.runtime.values import LiteralValue

R = TypeVar("R")


class Expression:
    """Base class for all expression nodes."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Literal(Expression):
    """
    A literal value.

    Example:
        42, "text", true, nil
    """

    value: LiteralValue


@dataclass(frozen=True, slots=True)
class Grouping(Expression):
    """
    A parenthesized sub-expression.

    Example:
        (1 + 2)
    """

    expression: Expression


@dataclass(frozen=True, slots=True)
class Unary(Expression):
    """
    A prefix operation.

    Example:
        -x, !flag
    """

    operator: Token
    right: Expression


@dataclass(frozen=True, slots=True)
class Binary(Expression):
    """
    An infix operation.

    Example:
        a + b, a == b
    """

    left: Expression
    operator: Token
    right: Expression


ExpressionNode = Union[Literal, Grouping, Unary, Binary]


class ExpressionVisitor(ABC, Generic[R]):
    """
    Runs one operation over any expression node.

    ``visit`` is the only dispatch point: it selects the handler from the
    node's class, and the set of node classes is closed. Implement the four
    ``visit_*`` methods to add an operation (printing, evaluation, ...).
    """

    def visit(self, node: Expression) -> R:
        """Dispatch to the handler for the node's variant."""
        match node:
            case Literal():
                return self.visit_literal(node)
            case Grouping():
                return self.visit_grouping(node)
            case Unary():
                return self.visit_unary(node)
            case Binary():
                return self.visit_binary(node)
            case _:
                raise TypeError(f"Unhandled expression node: {type(node).__name__}")

    @abstractmethod
    def visit_literal(self, node: Literal) -> R: ...

    @abstractmethod
    def visit_grouping(self, node: Grouping) -> R: ...

    @abstractmethod
    def visit_unary(self, node: Unary) -> R: ...

    @abstractmethod
    def visit_binary(self, node: Binary) -> R: ...
