"""Collaborator protocols consumed by the dispatcher and its adapters."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable


class FormulaEngine(Protocol):
    """Evaluates declarative formulas directly against a context."""

    def evaluate(self, text: str, context: Mapping[str, Any]) -> Any: ...


class CompiledExpression(Protocol):
    """Pre-parsed interpolated expression."""

    def evaluate(self, context: Mapping[str, Any]) -> Any: ...


class ExpressionProvider(Protocol):
    """Parses interpolated expression text into a reusable form."""

    def parse(self, text: str) -> CompiledExpression: ...


class CompiledScript(Protocol):
    """Ahead-of-time compiled script program."""

    def execute(self, bindings: MutableMapping[str, Any]) -> Any: ...


@runtime_checkable
class ScriptBackend(Protocol):
    """Execution engine for one general-purpose scripting language."""

    name: str
    language_name: str
    supports_compilation: bool

    def create_bindings(self) -> dict[str, Any]: ...

    def compile(self, text: str) -> CompiledScript: ...

    def execute(self, text: str, bindings: MutableMapping[str, Any]) -> Any: ...


class ScriptBackendResolver(Protocol):
    """Resolves script backends by language identifier."""

    def resolve(self, language_id: str) -> ScriptBackend | None: ...


class ResourceLookup(Protocol):
    """Finds named resources, returning ``None`` when absent."""

    def find_resource(self, name: str) -> bytes | None: ...
