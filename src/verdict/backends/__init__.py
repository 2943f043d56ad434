"""Backend adapters used by the dispatcher."""

from .formula import FormulaBackend
from .interpolated import InterpolatedBackend
from .script import ScriptBackendAdapter

__all__ = ["FormulaBackend", "InterpolatedBackend", "ScriptBackendAdapter"]
