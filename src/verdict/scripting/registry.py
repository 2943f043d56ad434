"""Registry mapping language identifiers to script backends.

Names are matched case-insensitively. Third-party backends can be
published under the ``verdict.script_backends`` entry-point group; each
entry point must load a backend class or zero-argument factory.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from importlib.metadata import entry_points

from verdict.constants.scripting import SCRIPT_BACKEND_ENTRY_POINT_GROUP
from verdict.exceptions import ConfigError
from verdict.scripting.python import PythonScriptBackend
from verdict.types import ScriptBackend

logger = logging.getLogger(__name__)


def _backend_names(backend: ScriptBackend) -> tuple[str, ...]:
    aliases = getattr(backend, "aliases", ())
    return tuple(dict.fromkeys((backend.name, *aliases)))


class ScriptBackendRegistry:
    """Thread-safe name to backend mapping."""

    def __init__(self) -> None:
        self._backends: dict[str, ScriptBackend] = {}
        self._lock = threading.Lock()

    def register(self, backend: ScriptBackend, names: Iterable[str] | None = None) -> None:
        """Register *backend* under *names*, or under its own name and aliases."""
        keys = tuple(names) if names is not None else _backend_names(backend)
        if not keys:
            raise ConfigError(f"Script backend {backend!r} has no language names")
        with self._lock:
            for key in keys:
                self._backends[key.lower()] = backend
        logger.debug("Registered script backend '%s' for %s", backend.name, ", ".join(keys))

    def unregister(self, language_id: str) -> ScriptBackend | None:
        with self._lock:
            return self._backends.pop(language_id.lower(), None)

    def resolve(self, language_id: str) -> ScriptBackend | None:
        """Return the backend registered for *language_id*, or ``None``."""
        return self._backends.get(language_id.lower())

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._backends))

    def backends(self) -> tuple[ScriptBackend, ...]:
        unique = {id(backend): backend for backend in self._backends.values()}
        return tuple(sorted(unique.values(), key=lambda backend: backend.name))

    def __contains__(self, language_id: object) -> bool:
        return isinstance(language_id, str) and language_id.lower() in self._backends

    def load_entry_points(self, group: str = SCRIPT_BACKEND_ENTRY_POINT_GROUP) -> int:
        """Register backends advertised under entry-point *group*.

        Returns the number of backends registered.
        """
        loaded = 0
        for entry_point in entry_points(group=group):
            factory = entry_point.load()
            backend = factory()
            if not isinstance(backend, ScriptBackend):
                raise ConfigError(f"Entry point '{entry_point.name}' did not produce a script backend")
            self.register(backend)
            loaded += 1
            logger.info("Loaded script backend '%s' from entry point '%s'", backend.name, entry_point.name)
        return loaded


def default_registry(enabled: Iterable[str] = (), *, load_entry_points: bool = False) -> ScriptBackendRegistry:
    """Return a registry with the bundled backends.

    When *enabled* is non-empty only those language names stay registered.
    """
    registry = ScriptBackendRegistry()
    registry.register(PythonScriptBackend())
    if load_entry_points:
        registry.load_entry_points()

    wanted = {name.lower() for name in enabled}
    if wanted:
        unknown = wanted - set(registry.names())
        if unknown:
            raise ConfigError(f"Unknown script backend(s): {', '.join(sorted(unknown))}")
        for name in registry.names():
            if name not in wanted:
                registry.unregister(name)
    return registry
