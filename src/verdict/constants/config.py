"""Configuration defaults and filenames."""

from __future__ import annotations

from verdict.constants.languages import FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE
from verdict.constants.scripting import APPLICATION_PRELUDE_NAME, GLOBAL_PRELUDE_NAME

CONFIG_FILENAME: str = "verdict.yaml"

DEFAULT_LANGUAGE: str = FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE
DEFAULT_GLOBAL_PRELUDE_NAME: str = GLOBAL_PRELUDE_NAME
DEFAULT_APPLICATION_PRELUDE_NAME: str = APPLICATION_PRELUDE_NAME

CONFIG_ALLOWED_KEYS: frozenset[str] = frozenset(
    {
        "default_language",
        "preludes",
        "script_backends",
        "load_entry_points",
        "sandboxed_templates",
    }
)
PRELUDE_ALLOWED_KEYS: frozenset[str] = frozenset({"enabled", "global_name", "application_name", "dirs"})
