"""Expressions and their per-object compiled artifact cache."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EMPTY = object()


class CompiledArtifactCache:
    """Lazily populated, thread-safe holder for compiled artifacts.

    Artifacts are keyed by language identifier so that an artifact built
    under one language is never handed out for another. Each slot moves
    from empty to populated exactly once and is never invalidated.

    Warm reads take no lock. The first population of a slot runs under a
    lock owned by this cache alone, so unrelated expressions never
    contend with each other.
    """

    __slots__ = ("_artifacts", "_lock", "_install_count")

    def __init__(self) -> None:
        self._artifacts: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._install_count = 0

    def get(self, language_id: str) -> Any | None:
        """Return the installed artifact for *language_id*, if any."""
        return self._artifacts.get(language_id)

    def get_or_install(self, language_id: str, factory: Callable[[], T]) -> T:
        """Return the artifact for *language_id*, building it at most once.

        *factory* runs inside the critical section. If it raises, the slot
        stays empty and the exception propagates to the caller. A ``None``
        artifact is installed like any other value.
        """
        artifact = self._artifacts.get(language_id, _EMPTY)
        if artifact is not _EMPTY:
            return artifact

        with self._lock:
            artifact = self._artifacts.get(language_id, _EMPTY)
            if artifact is _EMPTY:
                artifact = factory()
                self._artifacts[language_id] = artifact
                self._install_count += 1
                logger.debug("Installed compiled artifact for language '%s'", language_id)
        return artifact

    @property
    def install_count(self) -> int:
        """Number of artifacts installed over the lifetime of this cache."""
        return self._install_count

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._artifacts

    def __len__(self) -> int:
        return len(self._artifacts)


class Expression:
    """Immutable expression text plus its compiled artifact cache.

    Identity is the object itself: two expressions with equal text keep
    separate caches.
    """

    __slots__ = ("_text", "_cache", "__weakref__")

    def __init__(self, text: str | None) -> None:
        self._text = text
        self._cache = CompiledArtifactCache()

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def cache(self) -> CompiledArtifactCache:
        return self._cache

    def __repr__(self) -> str:
        return f"Expression({self._text!r})"
