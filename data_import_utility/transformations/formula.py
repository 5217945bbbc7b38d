"""Restricted arithmetic evaluator for calculation formulas.

Formulas are parsed with :mod:`ast` and only a fixed node set is accepted:

Allowed:
  - Numeric literals (evaluated as ``Decimal`` from their source text)
  - Binary operators: +, -, *, /, %, ** (``^`` is accepted as power)
  - Unary + and -
  - Parentheses

Everything else (names, calls, attribute access, strings, comparisons) is
rejected with ``FormulaError``.
"""

from __future__ import annotations

import ast
from decimal import Decimal, InvalidOperation
import operator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

MAX_EXPONENT = 1000
MAX_EXPRESSION_LENGTH = 4096
MAX_NESTING_DEPTH = 100

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[Decimal, Decimal], Decimal]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Decimal], Decimal]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class FormulaError(ValueError):
    pass


def evaluate_formula(expression: str) -> Decimal:
    """Evaluate an arithmetic expression.

    Raises:
        FormulaError: If the expression is malformed or uses anything beyond
            plain arithmetic.
        ArithmeticError: On arithmetic faults such as division by zero.
    """
    source = expression.replace("^", "**").strip()
    if not source:
        raise FormulaError("Empty expression")
    if len(source) > MAX_EXPRESSION_LENGTH:
        raise FormulaError(f"Expression longer than {MAX_EXPRESSION_LENGTH} characters")
    try:
        tree = ast.parse(source, mode="eval")
        return _evaluate(tree.body, source, 0)
    except SyntaxError as e:
        raise FormulaError(f"Syntax error: {e.msg}") from e
    except (RecursionError, MemoryError) as e:
        raise FormulaError("Expression is nested too deeply") from e


def _evaluate(node: ast.AST, source: str, depth: int) -> Decimal:
    if depth > MAX_NESTING_DEPTH:
        raise FormulaError(f"Expression nested deeper than {MAX_NESTING_DEPTH} levels")
    depth += 1

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise FormulaError(f"Disallowed constant: {node.value!r}")
        segment = ast.get_source_segment(source, node) or str(node.value)
        try:
            return Decimal(segment)
        except InvalidOperation as e:
            raise FormulaError(f"Invalid number: {segment}") from e

    if isinstance(node, ast.BinOp):
        binary = _BINARY_OPERATORS.get(type(node.op))
        if binary is None:
            raise FormulaError(f"Disallowed binary operator: {type(node.op).__name__}")
        left = _evaluate(node.left, source, depth)
        right = _evaluate(node.right, source, depth)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise FormulaError(f"Exponent too large: {right}")
        return binary(left, right)

    if isinstance(node, ast.UnaryOp):
        unary = _UNARY_OPERATORS.get(type(node.op))
        if unary is None:
            raise FormulaError(f"Disallowed unary operator: {type(node.op).__name__}")
        return unary(_evaluate(node.operand, source, depth))

    raise FormulaError(f"Disallowed expression element: {type(node).__name__}")
