"""Interpolated expression adapter with per-expression parse caching."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from verdict.exceptions import factory
from verdict.model import Expression
from verdict.types import ExpressionProvider


class InterpolatedBackend:
    """Parses each expression at most once, then evaluates the cached form."""

    def __init__(self, provider: ExpressionProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> ExpressionProvider:
        return self._provider

    def evaluate_interpolated(
        self,
        language_id: str,
        text: str,
        context: Mapping[str, Any],
        expression: Expression,
    ) -> Any:
        """Evaluate *text* under *language_id*, caching the parse on *expression*.

        Any failure while parsing or evaluating is raised as
        :class:`~verdict.exceptions.EvaluationFailure`.
        """
        try:
            compiled = expression.cache.get_or_install(language_id, lambda: self._provider.parse(text))
            return compiled.evaluate(context)
        except Exception as exc:
            raise factory.unable_to_evaluate_expression(text, language_id, exc) from exc
