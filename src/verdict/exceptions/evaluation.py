"""Exceptions raised while dispatching and evaluating expressions."""

from __future__ import annotations

from verdict.constants.errors import (
    FORMULA_EVALUATION_CODE,
    MISSING_LANGUAGE_IDENTIFIER_CODE,
    NO_BACKEND_FOR_LANGUAGE_CODE,
    UNABLE_TO_EVALUATE_CODE,
)
from verdict.exceptions.base import VerdictError


class MissingLanguageIdentifier(VerdictError, ValueError):
    """Raised when a required language identifier argument is absent."""

    code = MISSING_LANGUAGE_IDENTIFIER_CODE

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} is null or empty")
        self.argument = argument


class NoBackendForLanguage(VerdictError, LookupError):
    """Raised when no script backend is registered for a language."""

    code = NO_BACKEND_FOR_LANGUAGE_CODE

    def __init__(self, language_id: str) -> None:
        super().__init__(f"Unable to find a script backend for language '{language_id}'")
        self.language_id = language_id


class EvaluationFailure(VerdictError, RuntimeError):
    """Raised when a backend fails to parse or execute an expression.

    Carries the original expression text, the language or backend label,
    and the causing exception.
    """

    code = UNABLE_TO_EVALUATE_CODE

    def __init__(self, expression_text: str, language: str, cause: BaseException) -> None:
        super().__init__(f"Unable to evaluate expression for language '{language}': '{expression_text}': {cause}")
        self.expression_text = expression_text
        self.language = language
        self.cause = cause


class FormulaError(VerdictError, ValueError):
    """Raised by the bundled formula engine on syntax or evaluation errors."""

    code = FORMULA_EVALUATION_CODE

    def __init__(self, message: str, expression_text: str = "", *, code: str | None = None) -> None:
        super().__init__(message)
        self.expression_text = expression_text
        if code is not None:
            self.code = code
