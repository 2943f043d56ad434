"""Tests for the Jinja2-backed interpolated expression provider."""

from __future__ import annotations

import pytest
from jinja2 import TemplateSyntaxError
from jinja2.exceptions import TemplateRuntimeError, UndefinedError

from verdict.interpolated import JinjaExpressionProvider, split_template


@pytest.fixture()
def provider() -> JinjaExpressionProvider:
    return JinjaExpressionProvider()


class TestSplitTemplate:
    """Templates split into literal and placeholder segments."""

    def test_single_placeholder(self) -> None:
        segments = split_template("${a + b}")

        assert [type(s).__name__ for s in segments] == ["_Placeholder"]
        assert segments[0].source == "a + b"  # type: ignore[union-attr]

    def test_mixed_segments(self) -> None:
        segments = split_template("Hello ${name}, you owe #{amount}!")

        assert [getattr(s, "text", None) or getattr(s, "source", None) for s in segments] == [
            "Hello ",
            "name",
            ", you owe ",
            "amount",
            "!",
        ]

    def test_nested_braces_and_quotes(self) -> None:
        segments = split_template("${ {'k': '}'}['k'] }")

        assert segments[0].source == "{'k': '}'}['k']"  # type: ignore[union-attr]

    def test_unterminated(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="Unterminated"):
            split_template("${a + b")

    def test_empty_placeholder(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="Empty"):
            split_template("${  }")


class TestCompiledTemplate:
    """Compiled templates evaluate against a context many times."""

    def test_single_expression_keeps_type(self, provider: JinjaExpressionProvider) -> None:
        compiled = provider.parse("${a + b}")

        assert compiled.is_single_expression
        assert compiled.evaluate({"a": 2, "b": 3}) == 5
        assert compiled.evaluate({"a": 10, "b": -1}) == 9

    def test_composite_renders_string(self, provider: JinjaExpressionProvider) -> None:
        compiled = provider.parse("Hello ${name}, total ${total}")

        assert compiled.evaluate({"name": "Ada", "total": 3}) == "Hello Ada, total 3"

    def test_none_renders_empty_in_composite(self, provider: JinjaExpressionProvider) -> None:
        assert provider.parse("[${value}]").evaluate({"value": None}) == "[]"

    def test_boolean_expression(self, provider: JinjaExpressionProvider) -> None:
        compiled = provider.parse("${amount > 100 and customer == 'gold'}")

        assert compiled.evaluate({"amount": 150, "customer": "gold"}) is True

    def test_undefined_bare_variable(self, provider: JinjaExpressionProvider) -> None:
        with pytest.raises(UndefinedError):
            provider.parse("${missing}").evaluate({})

    def test_syntax_error_at_parse(self, provider: JinjaExpressionProvider) -> None:
        with pytest.raises(TemplateSyntaxError):
            provider.parse("${a +}")

    def test_sandbox_blocks_private_attributes(self, provider: JinjaExpressionProvider) -> None:
        with pytest.raises(TemplateRuntimeError):
            provider.parse("${value.__class__.__mro__}").evaluate({"value": 1})

    def test_non_sandboxed_environment(self) -> None:
        provider = JinjaExpressionProvider(sandboxed=False)

        assert provider.parse("${value.__class__.__name__}").evaluate({"value": 1}) == "int"
