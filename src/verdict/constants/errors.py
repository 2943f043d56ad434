"""Stable diagnostic codes attached to classified failures."""

from __future__ import annotations

MISSING_LANGUAGE_IDENTIFIER_CODE: str = "VERDICT-01001"
NO_BACKEND_FOR_LANGUAGE_CODE: str = "VERDICT-01002"
UNABLE_TO_EVALUATE_CODE: str = "VERDICT-01003"
FORMULA_SYNTAX_CODE: str = "VERDICT-02001"
FORMULA_EVALUATION_CODE: str = "VERDICT-02002"
TEMPLATE_SYNTAX_CODE: str = "VERDICT-03001"
