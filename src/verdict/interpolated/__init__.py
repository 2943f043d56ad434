"""Bundled interpolated expression provider (``${...}`` templates on Jinja2)."""

from .provider import CompiledTemplate, JinjaExpressionProvider, split_template

__all__ = ["CompiledTemplate", "JinjaExpressionProvider", "split_template"]
