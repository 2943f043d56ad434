"""Python script backend.

A script's value is the value of its final expression statement, or
``None`` when the script ends with any other statement. Scripts run
against a restricted builtins table.
"""

from __future__ import annotations

import ast
import builtins
import logging
from collections.abc import MutableMapping
from types import CodeType
from typing import Any

from verdict.constants.languages import PYTHON_LANGUAGE_NAMES
from verdict.constants.scripting import SAFE_BUILTIN_NAMES, SCRIPT_FILENAME, SCRIPT_RESULT_NAME
from verdict.scripting.bindings import ScriptBindings

logger = logging.getLogger(__name__)

SAFE_BUILTINS: dict[str, Any] = {name: getattr(builtins, name) for name in sorted(SAFE_BUILTIN_NAMES)}


def compile_script(text: str) -> CodeType:
    """Compile *text*, capturing the value of a trailing expression statement."""
    module = ast.parse(text, filename=SCRIPT_FILENAME, mode="exec")
    if module.body and isinstance(module.body[-1], ast.Expr):
        last = module.body[-1]
        module.body[-1] = ast.copy_location(
            ast.Assign(
                targets=[ast.Name(id=SCRIPT_RESULT_NAME, ctx=ast.Store())],
                value=last.value,
            ),
            last,
        )
        ast.fix_missing_locations(module)
    return compile(module, SCRIPT_FILENAME, "exec")


class CompiledPythonScript:
    """Compiled Python program, reusable across bindings and threads."""

    def __init__(self, code: CodeType, backend: PythonScriptBackend) -> None:
        self._code = code
        self._backend = backend

    def execute(self, bindings: MutableMapping[str, Any]) -> Any:
        return self._backend.run(self._code, bindings)


class PythonScriptBackend:
    """Script backend executing Python source."""

    name = "python"
    language_name = "Python"
    supports_compilation = True
    aliases: tuple[str, ...] = PYTHON_LANGUAGE_NAMES

    def __init__(self, extra_builtins: dict[str, Any] | None = None) -> None:
        self._builtins = dict(SAFE_BUILTINS)
        if extra_builtins:
            self._builtins.update(extra_builtins)

    def create_bindings(self) -> dict[str, Any]:
        return {}

    def compile(self, text: str) -> CompiledPythonScript:
        logger.debug("Compiling Python script (%d chars)", len(text))
        return CompiledPythonScript(compile_script(text), self)

    def execute(self, text: str, bindings: MutableMapping[str, Any]) -> Any:
        return self.run(compile_script(text), bindings)

    def run(self, code: CodeType, bindings: MutableMapping[str, Any]) -> Any:
        """Execute *code* in a fresh namespace built from *bindings*."""
        if isinstance(bindings, ScriptBindings):
            namespace = bindings.to_namespace()
        else:
            namespace = dict(bindings)
        namespace["__builtins__"] = self._builtins
        namespace.pop(SCRIPT_RESULT_NAME, None)
        exec(code, namespace)  # noqa: S102
        return namespace.get(SCRIPT_RESULT_NAME)
