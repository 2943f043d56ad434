"""Layered script bindings over a read-only variable context."""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Mapping, MutableMapping
from typing import Any

from verdict.constants.scripting import VARIABLE_CONTEXT_BINDING


class ScriptBindings(ChainMap):
    """Backend-native bindings layered over the variable context.

    Lookups fall through to the context; every write lands in the native
    layer, so the context is never mutated. The context itself is
    exposed under ``variableContext``.
    """

    def __init__(self, native: MutableMapping[str, Any], context: Mapping[str, Any]) -> None:
        super().__init__(native, context)  # type: ignore[arg-type]
        native[VARIABLE_CONTEXT_BINDING] = context

    @classmethod
    def wrap(cls, native: MutableMapping[str, Any], context: Mapping[str, Any]) -> ScriptBindings:
        return cls(native, context)

    @property
    def native(self) -> MutableMapping[str, Any]:
        return self.maps[0]

    @property
    def context(self) -> Mapping[str, Any]:
        return self.maps[1]

    def to_namespace(self) -> dict[str, Any]:
        """Return a flat dict snapshot suitable as an execution namespace."""
        namespace = dict(self.context)
        namespace.update(self.native)
        return namespace
