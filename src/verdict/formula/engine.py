"""FEEL simple expression engine built on a lark LALR grammar.

The grammar is compiled once per engine. Expression text is parsed on
every call; no parsed form is retained between evaluations.

Semantics follow FEEL where it is cheap to do so: arithmetic and
ordering comparisons involving ``null`` or mismatched types yield
``null`` instead of raising, and division by zero yields ``null``.
Referencing an unbound variable is an error.
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Callable, Mapping
from typing import Any

from lark import Lark, Token, Tree
from lark.exceptions import LarkError
from lark.visitors import Interpreter

from verdict.constants.errors import FORMULA_SYNTAX_CODE
from verdict.exceptions import FormulaError
from verdict.formula.functions import BUILTIN_FUNCTIONS

logger = logging.getLogger(__name__)

GRAMMAR_FILE = "feel.lark"

_STRING_ESCAPE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

_COMPARATORS: dict[str, Callable[[Any, Any], Any]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class _Range:
    """Interval produced by ``[a..b]`` style literals."""

    __slots__ = ("low", "high", "low_inclusive", "high_inclusive")

    def __init__(self, low: Any, high: Any, low_inclusive: bool, high_inclusive: bool) -> None:
        self.low = low
        self.high = high
        self.low_inclusive = low_inclusive
        self.high_inclusive = high_inclusive

    def __contains__(self, value: Any) -> bool:
        above = value >= self.low if self.low_inclusive else value > self.low
        below = value <= self.high if self.high_inclusive else value < self.high
        return above and below


def _unescape(raw: str) -> str:
    return _STRING_ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), raw[1:-1])


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class _FeelInterpreter(Interpreter):
    """Evaluates a parse tree top-down so ``if``/``and``/``or`` short-circuit."""

    def __init__(self, context: Mapping[str, Any], functions: Mapping[str, Callable[..., Any]]) -> None:
        self._context = context
        self._functions = functions

    def _eval(self, node: Tree | Token | None) -> Any:
        if isinstance(node, Tree):
            return self.visit(node)
        raise FormulaError(f"Unexpected node in formula tree: {node!r}")

    # literals

    def number(self, tree: Tree) -> int | float:
        raw = str(tree.children[0])
        return float(raw) if "." in raw else int(raw)

    def string(self, tree: Tree) -> str:
        return _unescape(str(tree.children[0]))

    def true(self, tree: Tree) -> bool:
        return True

    def false(self, tree: Tree) -> bool:
        return False

    def null(self, tree: Tree) -> None:
        return None

    def list(self, tree: Tree) -> list[Any]:
        return [self._eval(child) for child in tree.children if child is not None]

    def range_closed(self, tree: Tree) -> _Range:
        return self._range(tree, True, True)

    def range_right_open(self, tree: Tree) -> _Range:
        return self._range(tree, True, False)

    def range_left_open(self, tree: Tree) -> _Range:
        return self._range(tree, False, True)

    def range_open(self, tree: Tree) -> _Range:
        return self._range(tree, False, False)

    def _range(self, tree: Tree, low_inclusive: bool, high_inclusive: bool) -> _Range:
        low, high = (self._eval(child) for child in tree.children)
        return _Range(low, high, low_inclusive, high_inclusive)

    # names

    def name(self, tree: Tree) -> Any:
        variable = str(tree.children[0])
        if variable not in self._context:
            raise FormulaError(f"Unknown variable '{variable}'")
        return self._context[variable]

    def path(self, tree: Tree) -> Any:
        target = self._eval(tree.children[0])
        key = str(tree.children[1])
        if target is None:
            return None
        if isinstance(target, Mapping):
            return target.get(key)
        return getattr(target, key, None)

    def index(self, tree: Tree) -> Any:
        target = self._eval(tree.children[0])
        position = self._eval(tree.children[1])
        if target is None or position is None:
            return None
        # FEEL lists are 1-based; negative positions count from the end.
        if isinstance(position, int) and isinstance(target, (list, tuple, str)):
            if position == 0 or abs(position) > len(target):
                return None
            return target[position - 1] if position > 0 else target[position]
        if isinstance(target, Mapping):
            return target.get(position)
        return None

    def call(self, tree: Tree) -> Any:
        function_name = str(tree.children[0])
        arguments = tree.children[1]
        func = self._functions.get(function_name)
        if func is None:
            raise FormulaError(f"Unknown function '{function_name}'")
        args = [] if arguments is None else [self._eval(child) for child in arguments.children]
        try:
            return func(*args)
        except (TypeError, ValueError) as exc:
            raise FormulaError(f"Invalid arguments for function '{function_name}': {exc}") from exc

    # control flow

    def if_expr(self, tree: Tree) -> Any:
        condition, then_branch, else_branch = tree.children
        if self._eval(condition) is True:
            return self._eval(then_branch)
        return self._eval(else_branch)

    def and_expr(self, tree: Tree) -> bool | None:
        left = self._eval(tree.children[0])
        if left is False:
            return False
        right = self._eval(tree.children[1])
        if right is False:
            return False
        if left is True and right is True:
            return True
        return None

    def or_expr(self, tree: Tree) -> bool | None:
        left = self._eval(tree.children[0])
        if left is True:
            return True
        right = self._eval(tree.children[1])
        if right is True:
            return True
        if left is False and right is False:
            return False
        return None

    # comparisons

    def compare(self, tree: Tree) -> bool | None:
        left = self._eval(tree.children[0])
        op = str(tree.children[1])
        right = self._eval(tree.children[2])
        if op == "=":
            return left == right
        if op == "!=":
            return left != right
        if left is None or right is None:
            return None
        try:
            return _COMPARATORS[op](left, right)
        except TypeError:
            return None

    def in_expr(self, tree: Tree) -> bool | None:
        value = self._eval(tree.children[0])
        container = self._eval(tree.children[1])
        if value is None or container is None:
            return None
        if isinstance(container, (list, _Range, str)):
            try:
                return value in container
            except TypeError:
                return None
        return value == container

    def between(self, tree: Tree) -> bool | None:
        value, low, high = (self._eval(child) for child in tree.children)
        if value is None or low is None or high is None:
            return None
        try:
            return low <= value <= high
        except TypeError:
            return None

    # arithmetic

    def add(self, tree: Tree) -> Any:
        left, right = self._operands(tree)
        if left is None or right is None:
            return None
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        if _is_number(left) and _is_number(right):
            return left + right
        if isinstance(left, list) and isinstance(right, list):
            return left + right
        return None

    def sub(self, tree: Tree) -> Any:
        return self._numeric(tree, operator.sub)

    def mul(self, tree: Tree) -> Any:
        return self._numeric(tree, operator.mul)

    def div(self, tree: Tree) -> Any:
        left, right = self._operands(tree)
        if not (_is_number(left) and _is_number(right)) or right == 0:
            return None
        result = left / right
        return int(result) if isinstance(left, int) and isinstance(right, int) and result.is_integer() else result

    def pow(self, tree: Tree) -> Any:
        return self._numeric(tree, operator.pow)

    def neg(self, tree: Tree) -> Any:
        value = self._eval(tree.children[0])
        return -value if _is_number(value) else None

    def _operands(self, tree: Tree) -> tuple[Any, Any]:
        return self._eval(tree.children[0]), self._eval(tree.children[1])

    def _numeric(self, tree: Tree, op: Callable[[Any, Any], Any]) -> Any:
        left, right = self._operands(tree)
        if not (_is_number(left) and _is_number(right)):
            return None
        return op(left, right)


class FeelEngine:
    """Evaluates FEEL simple expressions against a variable context."""

    def __init__(self, functions: Mapping[str, Callable[..., Any]] | None = None) -> None:
        self._parser = Lark.open(GRAMMAR_FILE, rel_to=__file__, parser="lalr", maybe_placeholders=True)
        self._functions: dict[str, Callable[..., Any]] = dict(BUILTIN_FUNCTIONS)
        if functions:
            self._functions.update(functions)

    @property
    def function_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._functions))

    def parse(self, text: str) -> Tree:
        """Parse *text* into a lark tree, raising FormulaError on bad syntax."""
        try:
            return self._parser.parse(text)
        except LarkError as exc:
            raise FormulaError(
                f"Invalid formula syntax: {exc}",
                expression_text=text,
                code=FORMULA_SYNTAX_CODE,
            ) from exc

    def evaluate(self, text: str, context: Mapping[str, Any]) -> Any:
        """Parse and evaluate *text* against *context*."""
        tree = self.parse(text)
        logger.debug("Evaluating formula %r with %d variable(s)", text, len(context))
        interpreter = _FeelInterpreter(context, self._functions)
        try:
            return interpreter.visit(tree)
        except FormulaError as exc:
            if not exc.expression_text:
                exc.expression_text = text
            raise
