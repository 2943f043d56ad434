"""Expression language identifiers recognized by the dispatcher."""

from __future__ import annotations

FEEL_EXPRESSION_LANGUAGE: str = "http://www.omg.org/spec/FEEL/20140401"
FEEL_EXPRESSION_LANGUAGE_DMN12: str = "http://www.omg.org/spec/DMN/20180521/FEEL/"
FEEL_EXPRESSION_LANGUAGE_DMN13: str = "https://www.omg.org/spec/DMN/20191111/FEEL/"
FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE: str = "feel"

# Matched exactly; only the alternative is compared case-insensitively.
FEEL_NAMESPACE_IDENTIFIERS: frozenset[str] = frozenset(
    {
        FEEL_EXPRESSION_LANGUAGE,
        FEEL_EXPRESSION_LANGUAGE_DMN12,
        FEEL_EXPRESSION_LANGUAGE_DMN13,
    }
)

JUEL_EXPRESSION_LANGUAGE: str = "juel"

INTERPOLATION_OPENERS: tuple[str, ...] = ("${", "#{")
INTERPOLATION_CLOSER: str = "}"
DEFAULT_INTERPOLATION_OPENER: str = "${"

PYTHON_LANGUAGE_NAMES: tuple[str, ...] = ("python", "py", "python3")
