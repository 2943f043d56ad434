"""Script backend binding names, prelude resources, and entry points."""

from __future__ import annotations

VARIABLE_CONTEXT_BINDING: str = "variableContext"

GLOBAL_PRELUDE_NAME: str = "verdict_global.prelude"
APPLICATION_PRELUDE_NAME: str = "verdict.prelude"
PRELUDE_ENCODING: str = "utf-8"

SCRIPT_BACKEND_ENTRY_POINT_GROUP: str = "verdict.script_backends"

SCRIPT_RESULT_NAME: str = "__verdict_result__"
SCRIPT_FILENAME: str = "<verdict-script>"

SAFE_BUILTIN_NAMES: frozenset[str] = frozenset(
    {
        "abs",
        "all",
        "any",
        "bool",
        "dict",
        "divmod",
        "enumerate",
        "filter",
        "float",
        "frozenset",
        "int",
        "isinstance",
        "len",
        "list",
        "map",
        "max",
        "min",
        "range",
        "repr",
        "reversed",
        "round",
        "set",
        "sorted",
        "str",
        "sum",
        "tuple",
        "zip",
        "ArithmeticError",
        "Exception",
        "KeyError",
        "TypeError",
        "ValueError",
        "ZeroDivisionError",
    }
)
