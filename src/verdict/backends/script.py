"""General-purpose script adapter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from verdict.exceptions import EvaluationFailure, factory
from verdict.model import Expression
from verdict.prelude import Preludes
from verdict.scripting.bindings import ScriptBindings
from verdict.types import ScriptBackend, ScriptBackendResolver

logger = logging.getLogger(__name__)


class ScriptBackendAdapter:
    """Runs scripts through a backend resolved per language identifier.

    Compiled programs are cached per expression and language when the
    backend supports compilation. Prelude fragments are prepended to the
    script text before it is compiled or executed.
    """

    def __init__(self, resolver: ScriptBackendResolver, preludes: Preludes | None = None) -> None:
        self._resolver = resolver
        self._preludes = preludes or Preludes()

    @property
    def resolver(self) -> ScriptBackendResolver:
        return self._resolver

    @property
    def preludes(self) -> Preludes:
        return self._preludes

    def backend_for(self, language_id: str) -> ScriptBackend:
        """Return the backend for *language_id* or raise NoBackendForLanguage."""
        return self._resolve(factory.ensure_language_id(language_id, "expression_language"))

    def _resolve(self, language_id: str) -> ScriptBackend:
        backend = self._resolver.resolve(language_id)
        if backend is None:
            raise factory.no_backend_for_language(language_id)
        logger.debug("Resolved script backend '%s' for language '%s'", backend.name, language_id)
        return backend

    def evaluate_script(
        self,
        language_id: str,
        text: str,
        context: Mapping[str, Any],
        expression: Expression,
    ) -> Any:
        backend = self._resolve(language_id)
        bindings = ScriptBindings.wrap(backend.create_bindings(), context)
        script_text = self._preludes.apply(text)

        try:
            if backend.supports_compilation:
                compiled = expression.cache.get_or_install(language_id, lambda: backend.compile(script_text))
                return compiled.execute(bindings)
            return backend.execute(script_text, bindings)
        except EvaluationFailure:
            raise
        except Exception as exc:
            raise factory.unable_to_evaluate_expression(text, backend.language_name, exc) from exc
