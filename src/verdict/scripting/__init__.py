"""General-purpose script backends and their registry."""

from .bindings import ScriptBindings
from .python import PythonScriptBackend
from .registry import ScriptBackendRegistry, default_registry

__all__ = ["PythonScriptBackend", "ScriptBackendRegistry", "ScriptBindings", "default_registry"]
