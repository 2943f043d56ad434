"""Configuration loading and evaluator wiring for Verdict.

This package facade re-exports the public names so callers can use
``from verdict.config import ...``.
"""

from __future__ import annotations

from verdict.config.builder import build_evaluator
from verdict.config.loader import load_config
from verdict.config.model import EvaluatorConfig, PreludeConfig

__all__ = [
    "EvaluatorConfig",
    "PreludeConfig",
    "build_evaluator",
    "load_config",
]
