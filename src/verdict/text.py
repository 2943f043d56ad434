"""Expression text normalization.

Resolves raw expression text into the form a language expects and
prepends script prelude fragments.
"""

from __future__ import annotations

from verdict.constants.languages import (
    DEFAULT_INTERPOLATION_OPENER,
    INTERPOLATION_CLOSER,
    INTERPOLATION_OPENERS,
    JUEL_EXPRESSION_LANGUAGE,
)
from verdict.model import Expression


def is_delimited(text: str) -> bool:
    """Return True when *text* already starts with an interpolation delimiter."""
    stripped = text.strip()
    return stripped.startswith(INTERPOLATION_OPENERS)


def wrap_interpolation(text: str) -> str:
    """Wrap bare *text* in interpolation delimiters, leaving wrapped text alone."""
    if is_delimited(text):
        return text
    return f"{DEFAULT_INTERPOLATION_OPENER}{text}{INTERPOLATION_CLOSER}"


def is_interpolated_language(language_id: str) -> bool:
    """Return True for the interpolated expression language identifier."""
    return language_id == JUEL_EXPRESSION_LANGUAGE


def resolve_expression_text(expression: Expression | None, language_id: str) -> str | None:
    """Return the text to evaluate for *expression* under *language_id*.

    Returns ``None`` when the expression has no text. Whitespace-only text
    is passed through to the backend.
    """
    if expression is None:
        return None
    text = expression.text
    if not text:
        return None
    if is_interpolated_language(language_id):
        return wrap_interpolation(text)
    return text


def augment_script_text(text: str, global_prelude: str = "", application_prelude: str = "") -> str:
    """Return *text* prefixed by the global prelude, then the application prelude."""
    return f"{global_prelude}{application_prelude}{text}"
