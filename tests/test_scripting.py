"""Tests for script bindings, the Python backend, and the backend registry."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from verdict.constants.scripting import VARIABLE_CONTEXT_BINDING
from verdict.context import VariableContext
from verdict.dispatcher import ExpressionEvaluator
from verdict.exceptions import ConfigError, EvaluationFailure
from verdict.model import Expression
from verdict.prelude import Preludes
from verdict.scripting import PythonScriptBackend, ScriptBackendRegistry, ScriptBindings, default_registry
from verdict.scripting import registry as registry_module

from .conftest import CountingFormulaEngine, CountingProvider, FakeScriptBackend


class TestScriptBindings:
    """Native bindings sit on top of a read-only context."""

    def test_reads_fall_through_to_context(self) -> None:
        bindings = ScriptBindings.wrap({}, VariableContext({"a": 1}))

        assert bindings["a"] == 1

    def test_context_exposed_under_fixed_name(self) -> None:
        context = VariableContext({"a": 1})

        bindings = ScriptBindings.wrap({}, context)

        assert bindings[VARIABLE_CONTEXT_BINDING] is context

    def test_writes_never_reach_context(self) -> None:
        source = {"a": 1}
        bindings = ScriptBindings.wrap({}, source)

        bindings["a"] = 2
        bindings["b"] = 3

        assert source == {"a": 1}
        assert bindings.native["a"] == 2
        assert bindings["a"] == 2

    def test_namespace_snapshot(self) -> None:
        bindings = ScriptBindings.wrap({"native": True}, {"a": 1, "native": False})

        namespace = bindings.to_namespace()

        assert namespace["a"] == 1
        assert namespace["native"] is True


class TestPythonScriptBackend:
    """Python scripts return the value of their final expression."""

    @pytest.fixture()
    def backend(self) -> PythonScriptBackend:
        return PythonScriptBackend()

    def _run(self, backend: PythonScriptBackend, text: str, **variables: Any) -> Any:
        return backend.compile(text).execute(ScriptBindings.wrap(backend.create_bindings(), variables))

    def test_expression_value(self, backend: PythonScriptBackend) -> None:
        assert self._run(backend, "a + b", a=2, b=3) == 5

    def test_multi_statement_script(self, backend: PythonScriptBackend) -> None:
        script = "def double(x):\n    return x * 2\n\ntotal = double(a)\ntotal + 1"

        assert self._run(backend, script, a=4) == 9

    def test_statement_only_script_returns_none(self, backend: PythonScriptBackend) -> None:
        assert self._run(backend, "x = 1") is None

    def test_variable_context_binding(self, backend: PythonScriptBackend) -> None:
        assert self._run(backend, "variableContext['a']", a="ctx") == "ctx"

    def test_execute_without_compile(self, backend: PythonScriptBackend) -> None:
        assert backend.execute("len(items)", ScriptBindings.wrap({}, {"items": [1, 2]})) == 2

    def test_compiled_script_is_reusable(self, backend: PythonScriptBackend) -> None:
        compiled = backend.compile("a * 10")

        assert compiled.execute(ScriptBindings.wrap({}, {"a": 1})) == 10
        assert compiled.execute(ScriptBindings.wrap({}, {"a": 2})) == 20

    def test_restricted_builtins(self, backend: PythonScriptBackend) -> None:
        with pytest.raises(NameError):
            self._run(backend, "open('/etc/passwd')")

    def test_extra_builtins(self) -> None:
        backend = PythonScriptBackend(extra_builtins={"shout": str.upper})

        assert self._run(backend, "shout('hi')") == "HI"

    def test_syntax_error_on_compile(self, backend: PythonScriptBackend) -> None:
        with pytest.raises(SyntaxError):
            backend.compile("a +")


class TestScriptBackendRegistry:
    """Registry lookups are case-insensitive and support entry points."""

    def test_register_uses_name_and_aliases(self) -> None:
        registry = ScriptBackendRegistry()
        backend = PythonScriptBackend()

        registry.register(backend)

        assert registry.names() == ("py", "python", "python3")
        assert registry.resolve("PYTHON") is backend
        assert "py" in registry

    def test_register_with_explicit_names(self) -> None:
        registry = ScriptBackendRegistry()
        backend = FakeScriptBackend()

        registry.register(backend, ["JS", "javascript"])

        assert registry.resolve("js") is backend
        assert registry.resolve("fake") is None

    def test_register_without_names(self) -> None:
        with pytest.raises(ConfigError):
            ScriptBackendRegistry().register(FakeScriptBackend(), [])

    def test_unregister(self) -> None:
        registry = ScriptBackendRegistry()
        backend = FakeScriptBackend()
        registry.register(backend)

        assert registry.unregister("FAKE") is backend
        assert registry.resolve("fake") is None

    def test_backends_are_unique(self) -> None:
        registry = ScriptBackendRegistry()
        registry.register(PythonScriptBackend())

        assert [backend.name for backend in registry.backends()] == ["python"]

    def test_load_entry_points(self, monkeypatch: pytest.MonkeyPatch) -> None:
        entry_point = SimpleNamespace(name="fake", load=lambda: FakeScriptBackend)
        monkeypatch.setattr(registry_module, "entry_points", lambda group: [entry_point])
        registry = ScriptBackendRegistry()

        assert registry.load_entry_points() == 1
        assert isinstance(registry.resolve("fake"), FakeScriptBackend)

    def test_load_entry_points_rejects_non_backends(self, monkeypatch: pytest.MonkeyPatch) -> None:
        entry_point = SimpleNamespace(name="broken", load=lambda: object)
        monkeypatch.setattr(registry_module, "entry_points", lambda group: [entry_point])

        with pytest.raises(ConfigError, match="broken"):
            ScriptBackendRegistry().load_entry_points()

    def test_default_registry(self) -> None:
        assert isinstance(default_registry().resolve("python"), PythonScriptBackend)

    def test_default_registry_filters_enabled(self) -> None:
        registry = default_registry(["py"])

        assert registry.names() == ("py",)

    def test_default_registry_unknown_enabled(self) -> None:
        with pytest.raises(ConfigError, match="ruby"):
            default_registry(["ruby"])


class TestPythonThroughDispatcher:
    """End to end evaluation with the bundled Python backend."""

    @pytest.fixture()
    def evaluator(self) -> ExpressionEvaluator:
        return ExpressionEvaluator(
            CountingFormulaEngine(),
            CountingProvider(),
            default_registry(),
            Preludes("def clamp(v, lo, hi):\n    return max(lo, min(v, hi))\n", "LIMIT = 10\n"),
        )

    def test_preludes_are_available(self, evaluator: ExpressionEvaluator) -> None:
        assert evaluator.evaluate("python", Expression("clamp(x, 0, LIMIT)"), {"x": 42}) == 10

    def test_compiled_once_per_expression(self, evaluator: ExpressionEvaluator) -> None:
        expression = Expression("x * 2")

        assert evaluator.evaluate("python", expression, {"x": 1}) == 2
        artifact = expression.cache.get("python")
        assert evaluator.evaluate("python", expression, {"x": 5}) == 10
        assert expression.cache.get("python") is artifact

    def test_division_by_zero(self, evaluator: ExpressionEvaluator) -> None:
        with pytest.raises(EvaluationFailure) as excinfo:
            evaluator.evaluate("python", Expression("x / 0"), {"x": 1})

        assert excinfo.value.expression_text == "x / 0"
        assert excinfo.value.language == "Python"
        assert isinstance(excinfo.value.cause, ZeroDivisionError)

    def test_undefined_variable(self, evaluator: ExpressionEvaluator) -> None:
        with pytest.raises(EvaluationFailure) as excinfo:
            evaluator.evaluate("python", Expression("missing + 1"), {})

        assert isinstance(excinfo.value.cause, NameError)

    def test_syntax_error_is_wrapped_and_not_cached(self, evaluator: ExpressionEvaluator) -> None:
        expression = Expression("1 +")

        with pytest.raises(EvaluationFailure):
            evaluator.evaluate("python", expression, {})

        assert expression.cache.get("python") is None

    def test_script_cannot_mutate_context(self, evaluator: ExpressionEvaluator) -> None:
        variables = {"items": (1, 2), "x": 1}

        evaluator.evaluate("python", Expression("x = 99\nx"), variables)

        assert variables["x"] == 1
