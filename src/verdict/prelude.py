"""Best-effort lookup of script prelude fragments.

Two optional fragments may be prepended to every script: a global one
found next to the evaluator installation, and an application one found
through the caller's hosting context. A missing resource and a missing
hosting context both yield an empty fragment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from verdict.constants.scripting import (
    APPLICATION_PRELUDE_NAME,
    GLOBAL_PRELUDE_NAME,
    PRELUDE_ENCODING,
)
from verdict.exceptions import ConfigError
from verdict.text import augment_script_text
from verdict.types import ResourceLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preludes:
    """Prelude fragments resolved once at evaluator construction time."""

    global_text: str = ""
    application_text: str = ""

    def apply(self, text: str) -> str:
        """Return *text* with the global then application fragments prepended."""
        return augment_script_text(text, self.global_text, self.application_text)

    @property
    def empty(self) -> bool:
        return not self.global_text and not self.application_text


class DirectoryResourceLookup:
    """Looks up resources as files in an ordered list of directories."""

    def __init__(self, directories: Iterable[Path]) -> None:
        self._directories = tuple(Path(d) for d in directories)

    def find_resource(self, name: str) -> bytes | None:
        for directory in self._directories:
            candidate = directory / name
            if not candidate.is_file():
                continue
            try:
                return candidate.read_bytes()
            except OSError as exc:
                logger.debug("Unreadable resource %s: %s", candidate, exc)
                return None
        return None

    def __repr__(self) -> str:
        return f"DirectoryResourceLookup({[str(d) for d in self._directories]!r})"


class PackageResourceLookup:
    """Looks up resources shipped inside an importable package."""

    def __init__(self, package: str) -> None:
        self._package = package

    def find_resource(self, name: str) -> bytes | None:
        try:
            resource = resources.files(self._package).joinpath(name)
        except ModuleNotFoundError:
            return None
        if not resource.is_file():
            return None
        return resource.read_bytes()


@dataclass(frozen=True)
class HostingContext:
    """Caller-supplied application context that may carry its own resources."""

    name: str
    resources: ResourceLookup | None = None


def read_fragment(lookup: ResourceLookup | None, name: str) -> str:
    """Return the decoded resource *name*, or an empty string when unavailable.

    A fragment that exists but is not valid text raises ConfigError.
    """
    if lookup is None:
        return ""
    data = lookup.find_resource(name)
    if data is None:
        logger.debug("Prelude fragment '%s' not found via %r", name, lookup)
        return ""
    logger.debug("Loaded prelude fragment '%s' (%d bytes)", name, len(data))
    try:
        return data.decode(PRELUDE_ENCODING)
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Prelude fragment '{name}' is not valid {PRELUDE_ENCODING}: {exc}") from exc


def load_preludes(
    global_lookup: ResourceLookup | None,
    hosting_context: HostingContext | None = None,
    *,
    global_name: str = GLOBAL_PRELUDE_NAME,
    application_name: str = APPLICATION_PRELUDE_NAME,
) -> Preludes:
    """Resolve both prelude fragments into a :class:`Preludes` value."""
    application_lookup = hosting_context.resources if hosting_context is not None else None
    return Preludes(
        global_text=read_fragment(global_lookup, global_name),
        application_text=read_fragment(application_lookup, application_name),
    )
