"""Parse ``${...}`` / ``#{...}`` templates into reusable compiled forms.

Each delimited segment is compiled once with
:meth:`jinja2.Environment.compile_expression`. A template made of a
single delimited segment evaluates to that segment's value, keeping its
type. Any other template evaluates to the concatenated string.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, Undefined
from jinja2.exceptions import UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from verdict.constants.languages import INTERPOLATION_CLOSER, INTERPOLATION_OPENERS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Literal:
    text: str


@dataclass(frozen=True)
class _Placeholder:
    source: str


Segment = Union[_Literal, _Placeholder]


def _find_closer(text: str, start: int) -> int:
    """Return the index of the brace closing the segment opened before *start*."""
    depth = 1
    quote: str | None = None
    index = start
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "{":
            depth += 1
        elif char == INTERPOLATION_CLOSER:
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def split_template(text: str) -> list[Segment]:
    """Split *text* into literal and placeholder segments."""
    segments: list[Segment] = []
    position = 0
    while position < len(text):
        openings = [text.find(opener, position) for opener in INTERPOLATION_OPENERS]
        found = [index for index in openings if index >= 0]
        if not found:
            segments.append(_Literal(text[position:]))
            break
        opening = min(found)
        if opening > position:
            segments.append(_Literal(text[position:opening]))
        closing = _find_closer(text, opening + 2)
        if closing < 0:
            raise TemplateSyntaxError(f"Unterminated expression starting at offset {opening}", lineno=1)
        source = text[opening + 2 : closing].strip()
        if not source:
            raise TemplateSyntaxError(f"Empty expression at offset {opening}", lineno=1)
        segments.append(_Placeholder(source))
        position = closing + 1
    return segments


class CompiledTemplate:
    """Pre-parsed interpolated expression, safe to evaluate concurrently."""

    def __init__(self, text: str, parts: list[str | tuple[str, Callable[..., Any]]]) -> None:
        self._text = text
        self._parts = parts

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_single_expression(self) -> bool:
        return len(self._parts) == 1 and isinstance(self._parts[0], tuple)

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        variables = dict(context)
        if self.is_single_expression:
            source, expression = self._parts[0]  # type: ignore[misc]
            return _call(source, expression, variables)
        rendered: list[str] = []
        for part in self._parts:
            if isinstance(part, str):
                rendered.append(part)
                continue
            value = _call(part[0], part[1], variables)
            rendered.append("" if value is None else str(value))
        return "".join(rendered)

    def __repr__(self) -> str:
        return f"CompiledTemplate({self._text!r})"


def _call(source: str, expression: Callable[..., Any], variables: dict[str, Any]) -> Any:
    value = expression(variables)
    if isinstance(value, Undefined):
        raise UndefinedError(f"Expression '{source}' is undefined")
    return value


class JinjaExpressionProvider:
    """Expression provider for the interpolated language."""

    def __init__(self, environment: Environment | None = None, *, sandboxed: bool = True) -> None:
        if environment is None:
            env_class = SandboxedEnvironment if sandboxed else Environment
            environment = env_class(undefined=StrictUndefined, autoescape=False)
        self._environment = environment

    @property
    def environment(self) -> Environment:
        return self._environment

    def parse(self, text: str) -> CompiledTemplate:
        """Compile *text* into a :class:`CompiledTemplate`."""
        parts: list[str | tuple[str, Callable[..., Any]]] = []
        for segment in split_template(text):
            if isinstance(segment, _Literal):
                parts.append(segment.text)
            else:
                compiled = self._environment.compile_expression(segment.source, undefined_to_none=False)
                parts.append((segment.source, compiled))
        logger.debug("Parsed interpolated expression %r into %d part(s)", text, len(parts))
        return CompiledTemplate(text, parts)
