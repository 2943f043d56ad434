"""Wire configured collaborators into an :class:`ExpressionEvaluator`."""

from __future__ import annotations

import logging

from verdict.config.model import EvaluatorConfig
from verdict.dispatcher import ExpressionEvaluator
from verdict.formula import FeelEngine
from verdict.interpolated import JinjaExpressionProvider
from verdict.prelude import (
    DirectoryResourceLookup,
    HostingContext,
    PackageResourceLookup,
    Preludes,
    load_preludes,
)
from verdict.scripting import default_registry
from verdict.types import ResourceLookup

logger = logging.getLogger(__name__)


class _ChainedResourceLookup:
    """Tries each lookup in order and returns the first hit."""

    def __init__(self, *lookups: ResourceLookup) -> None:
        self._lookups = lookups

    def find_resource(self, name: str) -> bytes | None:
        for lookup in self._lookups:
            data = lookup.find_resource(name)
            if data is not None:
                return data
        return None

    def __repr__(self) -> str:
        return f"_ChainedResourceLookup{self._lookups!r}"


def resolve_preludes(config: EvaluatorConfig, hosting_context: HostingContext | None = None) -> Preludes:
    """Load prelude fragments described by *config*."""
    if not config.preludes.enabled:
        return Preludes()
    global_lookup = _ChainedResourceLookup(
        DirectoryResourceLookup(config.preludes.dirs),
        PackageResourceLookup("verdict"),
    )
    return load_preludes(
        global_lookup,
        hosting_context,
        global_name=config.preludes.global_name,
        application_name=config.preludes.application_name,
    )


def build_evaluator(
    config: EvaluatorConfig | None = None,
    hosting_context: HostingContext | None = None,
) -> ExpressionEvaluator:
    """Return an evaluator backed by the bundled engines."""
    config = config or EvaluatorConfig()
    registry = default_registry(config.script_backends, load_entry_points=config.load_entry_points)
    preludes = resolve_preludes(config, hosting_context)
    if not preludes.empty:
        logger.debug("Script preludes active for hosting context %r", hosting_context)
    return ExpressionEvaluator(
        formula_engine=FeelEngine(),
        expression_provider=JinjaExpressionProvider(sandboxed=config.sandboxed_templates),
        script_resolver=registry,
        preludes=preludes,
    )
