"""Declarative formula adapter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from verdict.types import FormulaEngine


class FormulaBackend:
    """Evaluates formulas directly on every call.

    Nothing is cached here and engine failures propagate unchanged.
    """

    def __init__(self, engine: FormulaEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> FormulaEngine:
        return self._engine

    def evaluate_formula(self, text: str, context: Mapping[str, Any]) -> Any:
        return self._engine.evaluate(text, context)
