"""CLI entrypoint for Verdict."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from verdict import __version__
from verdict.config import EvaluatorConfig, build_evaluator, load_config
from verdict.constants.branding import CLI_DESCRIPTION
from verdict.constants.languages import (
    FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE,
    FEEL_NAMESPACE_IDENTIFIERS,
    JUEL_EXPRESSION_LANGUAGE,
)
from verdict.exceptions import ConfigError, EvaluationFailure, FormulaError, NoBackendForLanguage, VerdictError
from verdict.model import Expression
from verdict.prelude import DirectoryResourceLookup, HostingContext
from verdict.scripting import default_registry


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="verdict",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("eval", help="Evaluate one expression and print the result as JSON")
    evaluate.add_argument("-e", "--expression", required=True, help="Expression text")
    evaluate.add_argument(
        "-l",
        "--language",
        default=None,
        help="Expression language identifier (default: config default_language)",
    )
    evaluate.add_argument(
        "-V",
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable; VALUE is parsed as a YAML scalar (repeat for multiple)",
    )
    evaluate.add_argument("-F", "--vars-file", type=Path, default=None, help="YAML mapping of variables")
    evaluate.add_argument(
        "-A",
        "--app-dir",
        type=Path,
        default=None,
        help="Application directory searched for the application prelude",
    )
    _add_config_arguments(evaluate)

    languages = subparsers.add_parser("languages", help="List supported expression languages")
    _add_config_arguments(languages)

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory holding verdict.yaml")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        config = load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.command == "languages":
        return _handle_languages(config)
    if args.command != "eval":
        parser.error(f"Unsupported command: {args.command}")

    try:
        variables = _collect_variables(args.var, args.vars_file)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    hosting_context = None
    if args.app_dir is not None:
        hosting_context = HostingContext(name=str(args.app_dir), resources=DirectoryResourceLookup([args.app_dir]))

    language = args.language or config.default_language
    try:
        evaluator = build_evaluator(config, hosting_context)
        result = evaluator.evaluate(language, Expression(args.expression), variables)
    except (ConfigError, NoBackendForLanguage) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except (EvaluationFailure, FormulaError) as exc:
        print(f"Evaluation error: {exc}", file=sys.stderr)
        return 1
    except VerdictError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, default=str))
    return 0


def _handle_languages(config: EvaluatorConfig) -> int:
    """Print the language identifiers each evaluation path accepts."""
    try:
        registry = default_registry(config.script_backends, load_entry_points=config.load_entry_points)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    print("formula:")
    for identifier in (FEEL_EXPRESSION_LANGUAGE_ALTERNATIVE, *sorted(FEEL_NAMESPACE_IDENTIFIERS)):
        print(f"  {identifier}")
    print("interpolated:")
    print(f"  {JUEL_EXPRESSION_LANGUAGE}")
    print("script:")
    for backend in registry.backends():
        names = [name for name in registry.names() if registry.resolve(name) is backend]
        print(f"  {backend.name} ({backend.language_name}): {', '.join(names)}")
    return 0


def _collect_variables(pairs: list[str], vars_file: Path | None) -> dict[str, Any]:
    """Merge variables from a YAML file and ``NAME=VALUE`` pairs (pairs win)."""
    variables: dict[str, Any] = {}
    if vars_file is not None:
        try:
            raw = yaml.safe_load(vars_file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Failed to read variables file {vars_file}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {vars_file}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Variables file {vars_file} must contain a mapping")
        variables.update(raw)

    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ConfigError(f"Variable binding must look like NAME=VALUE, got {pair!r}")
        try:
            variables[name.strip()] = yaml.safe_load(value) if value else None
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid value for variable {name.strip()!r}: {exc}") from exc
    return variables


if __name__ == "__main__":
    raise SystemExit(main())
