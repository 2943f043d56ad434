"""Config data model for the expression evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from verdict.constants.config import (
    DEFAULT_APPLICATION_PRELUDE_NAME,
    DEFAULT_GLOBAL_PRELUDE_NAME,
    DEFAULT_LANGUAGE,
)


@dataclass(frozen=True)
class PreludeConfig:
    """Where script prelude fragments are looked up."""

    enabled: bool = True
    global_name: str = DEFAULT_GLOBAL_PRELUDE_NAME
    application_name: str = DEFAULT_APPLICATION_PRELUDE_NAME
    dirs: tuple[Path, ...] = ()


@dataclass(frozen=True)
class EvaluatorConfig:
    """Resolved evaluator config."""

    default_language: str = DEFAULT_LANGUAGE
    preludes: PreludeConfig = field(default_factory=PreludeConfig)
    script_backends: tuple[str, ...] = ()
    load_entry_points: bool = False
    sandboxed_templates: bool = True
