"""Configuration-related exceptions."""

from __future__ import annotations

from verdict.exceptions.base import VerdictError


class ConfigError(VerdictError, ValueError):
    """Raised when evaluator configuration is invalid."""
