"""Expression evaluation dispatcher.

Classifies an expression language and routes evaluation to one of three
backend adapters:

- declarative formulas (FEEL) are evaluated directly on every call;
- interpolated expressions (``juel``) are parsed once per expression;
- everything else is a script language resolved from a backend registry,
  compiled once per expression when the backend supports it.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any

from verdict.backends import FormulaBackend, InterpolatedBackend, ScriptBackendAdapter
from verdict.constants.languages import (
    FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE,
    FEEL_NAMESPACE_IDENTIFIERS,
)
from verdict.context import VariableContext
from verdict.exceptions import factory
from verdict.model import Expression
from verdict.prelude import Preludes
from verdict.text import is_interpolated_language, resolve_expression_text
from verdict.types import ExpressionProvider, FormulaEngine, ScriptBackendResolver

logger = logging.getLogger(__name__)


class LanguageKind(enum.Enum):
    """Closed set of evaluation paths known to the dispatcher."""

    FORMULA = "formula"
    INTERPOLATED = "interpolated"
    SCRIPT = "script"


def is_formula_language(language_id: str | None) -> bool:
    """Return True for FEEL identifiers; the ``feel`` alias ignores case."""
    return _is_formula(factory.ensure_language_id(language_id, "expression_language"))


def _is_formula(language_id: str) -> bool:
    return language_id in FEEL_NAMESPACE_IDENTIFIERS or language_id.lower() == FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE


def classify_language(language_id: str | None) -> LanguageKind:
    """Return the evaluation path for *language_id*.

    Formula identifiers are tested first, then the interpolated
    identifier; anything else is treated as a script language.
    """
    return _classify(factory.ensure_language_id(language_id, "expression_language"))


def _classify(language_id: str) -> LanguageKind:
    if _is_formula(language_id):
        return LanguageKind.FORMULA
    if is_interpolated_language(language_id):
        return LanguageKind.INTERPOLATED
    return LanguageKind.SCRIPT


class ExpressionEvaluator:
    """Evaluates expressions in any supported language.

    Instances hold no per-call state and may be shared between threads.
    """

    def __init__(
        self,
        formula_engine: FormulaEngine,
        expression_provider: ExpressionProvider,
        script_resolver: ScriptBackendResolver,
        preludes: Preludes | None = None,
    ) -> None:
        self._formula = FormulaBackend(formula_engine)
        self._interpolated = InterpolatedBackend(expression_provider)
        self._script = ScriptBackendAdapter(script_resolver, preludes)

    @property
    def script_adapter(self) -> ScriptBackendAdapter:
        return self._script

    def evaluate(
        self,
        language_id: str | None,
        expression: Expression | None,
        variable_context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Evaluate *expression* under *language_id* against *variable_context*.

        Returns ``None`` without touching any backend when the expression
        has no text.
        """
        language_id = factory.ensure_language_id(language_id, "expression_language")
        text = resolve_expression_text(expression, language_id)
        if text is None:
            return None

        context = VariableContext.of(variable_context)
        kind = _classify(language_id)
        logger.debug("Evaluating %s expression under '%s'", kind.value, language_id)

        if kind is LanguageKind.FORMULA:
            return self._formula.evaluate_formula(text, context)
        if kind is LanguageKind.INTERPOLATED:
            return self._interpolated.evaluate_interpolated(language_id, text, context, expression)  # type: ignore[arg-type]
        return self._script.evaluate_script(language_id, text, context, expression)  # type: ignore[arg-type]

    def is_formula_language(self, language_id: str | None) -> bool:
        return is_formula_language(language_id)

    def is_script_language(self, language_id: str | None) -> bool:
        """Return True when *language_id* resolves to a registered script backend."""
        if classify_language(language_id) is not LanguageKind.SCRIPT:
            return False
        return self._script.resolver.resolve(language_id) is not None  # type: ignore[arg-type]
