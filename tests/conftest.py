"""Shared pytest fixtures and counting fakes for evaluator tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping, MutableMapping
from typing import Any

import pytest

from verdict.dispatcher import ExpressionEvaluator
from verdict.formula import FeelEngine
from verdict.interpolated import JinjaExpressionProvider
from verdict.prelude import Preludes
from verdict.scripting import ScriptBackendRegistry


class CountingFormulaEngine:
    """Formula engine that records calls and delegates to FeelEngine."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Mapping[str, Any]]] = []
        self._delegate = FeelEngine()

    def evaluate(self, text: str, context: Mapping[str, Any]) -> Any:
        self.calls.append((text, context))
        return self._delegate.evaluate(text, context)


class CountingProvider:
    """Interpolated expression provider that counts parses."""

    def __init__(self, delay: float = 0.0) -> None:
        self.parsed: list[str] = []
        self._delegate = JinjaExpressionProvider()
        self._lock = threading.Lock()
        self._delay = delay

    @property
    def parse_count(self) -> int:
        return len(self.parsed)

    def parse(self, text: str) -> Any:
        if self._delay:
            time.sleep(self._delay)
        with self._lock:
            self.parsed.append(text)
        return self._delegate.parse(text)


class _CompiledFake:
    def __init__(self, backend: FakeScriptBackend, text: str) -> None:
        self.backend = backend
        self.text = text

    def execute(self, bindings: MutableMapping[str, Any]) -> Any:
        return self.backend.run(self.text, bindings)


class FakeScriptBackend:
    """Script backend understanding ``name`` lookups and ``raise``.

    The script's value is the binding named by the last line of text,
    which lets tests observe prelude ordering and binding layering.
    """

    language_name = "Fake Script"

    def __init__(self, name: str = "fake", *, compilable: bool = True) -> None:
        self.name = name
        self.supports_compilation = compilable
        self.compiled: list[str] = []
        self.executed: list[str] = []
        self.bindings_created = 0
        self.last_bindings: MutableMapping[str, Any] | None = None

    def create_bindings(self) -> dict[str, Any]:
        self.bindings_created += 1
        return {"engine": self.name}

    def compile(self, text: str) -> _CompiledFake:
        self.compiled.append(text)
        return _CompiledFake(self, text)

    def execute(self, text: str, bindings: MutableMapping[str, Any]) -> Any:
        self.executed.append(text)
        return self.run(text, bindings)

    def run(self, text: str, bindings: MutableMapping[str, Any]) -> Any:
        self.last_bindings = bindings
        last_line = text.strip().splitlines()[-1].strip()
        if last_line == "raise":
            raise RuntimeError("script exploded")
        return bindings[last_line]


@pytest.fixture()
def formula_engine() -> CountingFormulaEngine:
    return CountingFormulaEngine()


@pytest.fixture()
def provider() -> CountingProvider:
    return CountingProvider()


@pytest.fixture()
def fake_backend() -> FakeScriptBackend:
    return FakeScriptBackend()


@pytest.fixture()
def registry(fake_backend: FakeScriptBackend) -> ScriptBackendRegistry:
    registry = ScriptBackendRegistry()
    registry.register(fake_backend)
    return registry


@pytest.fixture()
def evaluator(
    formula_engine: CountingFormulaEngine,
    provider: CountingProvider,
    registry: ScriptBackendRegistry,
) -> ExpressionEvaluator:
    return ExpressionEvaluator(formula_engine, provider, registry, Preludes())
