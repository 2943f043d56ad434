"""Verdict: multi-language expression evaluation for decision tables."""

from __future__ import annotations

from verdict.config import EvaluatorConfig, build_evaluator, load_config
from verdict.context import VariableContext
from verdict.dispatcher import ExpressionEvaluator, LanguageKind, classify_language
from verdict.exceptions import (
    EvaluationFailure,
    MissingLanguageIdentifier,
    NoBackendForLanguage,
    VerdictError,
)
from verdict.model import Expression

__version__ = "0.3.0"

__all__ = [
    "EvaluationFailure",
    "EvaluatorConfig",
    "Expression",
    "ExpressionEvaluator",
    "LanguageKind",
    "MissingLanguageIdentifier",
    "NoBackendForLanguage",
    "VariableContext",
    "VerdictError",
    "__version__",
    "build_evaluator",
    "classify_language",
    "load_config",
]
