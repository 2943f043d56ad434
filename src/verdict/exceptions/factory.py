"""Builders for classified evaluation failures."""

from __future__ import annotations

from verdict.exceptions.evaluation import (
    EvaluationFailure,
    MissingLanguageIdentifier,
    NoBackendForLanguage,
)


def unable_to_evaluate_expression(expression_text: str, language: str, cause: BaseException) -> EvaluationFailure:
    """Return the uniform evaluation failure for *expression_text*."""
    return EvaluationFailure(expression_text, language, cause)


def no_backend_for_language(language_id: str) -> NoBackendForLanguage:
    """Return the failure for an unregistered script language."""
    return NoBackendForLanguage(language_id)


def missing_language_identifier(argument: str = "language_id") -> MissingLanguageIdentifier:
    """Return the failure for an absent language identifier argument."""
    return MissingLanguageIdentifier(argument)


def ensure_language_id(language_id: str | None, argument: str = "language_id") -> str:
    """Return *language_id* or raise when it is ``None`` or empty."""
    if not language_id:
        raise missing_language_identifier(argument)
    return language_id
