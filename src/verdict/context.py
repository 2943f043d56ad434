"""Read-only variable context passed to a single evaluation call."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any


class VariableContext(Mapping[str, Any]):
    """Immutable name to value view scoped to one evaluation.

    The wrapped mapping is never mutated. Values themselves are shared
    with the caller, so backends must treat them as read-only too.
    """

    __slots__ = ("_variables",)

    def __init__(self, variables: Mapping[str, Any] | None = None) -> None:
        self._variables: Mapping[str, Any] = MappingProxyType(dict(variables or {}))

    @classmethod
    def of(cls, variables: Mapping[str, Any] | VariableContext | None) -> VariableContext:
        """Return *variables* as a context, wrapping plain mappings."""
        if isinstance(variables, VariableContext):
            return variables
        return cls(variables)

    def __getitem__(self, name: str) -> Any:
        return self._variables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def resolve(self, name: str, default: Any = None) -> Any:
        """Return the value bound to *name*, or *default* when unbound."""
        return self._variables.get(name, default)

    def __repr__(self) -> str:
        return f"VariableContext({dict(self._variables)!r})"
