"""Shared protocols and type aliases for Verdict."""

from .backends import (
    CompiledExpression,
    CompiledScript,
    ExpressionProvider,
    FormulaEngine,
    ResourceLookup,
    ScriptBackend,
    ScriptBackendResolver,
)

__all__ = [
    "CompiledExpression",
    "CompiledScript",
    "ExpressionProvider",
    "FormulaEngine",
    "ResourceLookup",
    "ScriptBackend",
    "ScriptBackendResolver",
]
