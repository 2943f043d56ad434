"""Bundled declarative formula engine (FEEL simple expression subset)."""

from .engine import FeelEngine
from .functions import BUILTIN_FUNCTIONS

__all__ = ["BUILTIN_FUNCTIONS", "FeelEngine"]
