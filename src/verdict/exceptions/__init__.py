"""Shared exception hierarchy for Verdict."""

from __future__ import annotations

from .base import VerdictError
from .config import ConfigError
from .evaluation import (
    EvaluationFailure,
    FormulaError,
    MissingLanguageIdentifier,
    NoBackendForLanguage,
)

__all__ = [
    "ConfigError",
    "EvaluationFailure",
    "FormulaError",
    "MissingLanguageIdentifier",
    "NoBackendForLanguage",
    "VerdictError",
]
