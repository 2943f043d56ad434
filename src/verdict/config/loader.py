"""Config loading and normalization from ``verdict.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from verdict.config.model import EvaluatorConfig, PreludeConfig
from verdict.constants.config import (
    CONFIG_ALLOWED_KEYS,
    CONFIG_FILENAME,
    DEFAULT_APPLICATION_PRELUDE_NAME,
    DEFAULT_GLOBAL_PRELUDE_NAME,
    DEFAULT_LANGUAGE,
    PRELUDE_ALLOWED_KEYS,
)
from verdict.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> EvaluatorConfig:
    """Load and validate evaluator config from ``verdict.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return EvaluatorConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = set(raw) - CONFIG_ALLOWED_KEYS
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(sorted(map(str, unknown)))}")

    default_language = raw.get("default_language", DEFAULT_LANGUAGE)
    if not isinstance(default_language, str) or not default_language.strip():
        raise ConfigError("default_language must be a non-empty string")

    load_entry_points = raw.get("load_entry_points", False)
    if not isinstance(load_entry_points, bool):
        raise ConfigError("load_entry_points must be a boolean")

    sandboxed_templates = raw.get("sandboxed_templates", True)
    if not isinstance(sandboxed_templates, bool):
        raise ConfigError("sandboxed_templates must be a boolean")

    return EvaluatorConfig(
        default_language=default_language.strip(),
        preludes=_load_preludes(raw.get("preludes", {}), base_dir=path.parent),
        script_backends=tuple(
            name.strip() for name in _ensure_string_list(raw.get("script_backends", []), "script_backends")
        ),
        load_entry_points=load_entry_points,
        sandboxed_templates=sandboxed_templates,
    )


def _load_preludes(raw: Any, base_dir: Path) -> PreludeConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("preludes must be a mapping")

    unknown = set(raw) - PRELUDE_ALLOWED_KEYS
    if unknown:
        raise ConfigError(f"Unknown preludes key(s): {', '.join(sorted(map(str, unknown)))}")

    enabled = raw.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError("preludes.enabled must be a boolean")

    global_name = raw.get("global_name", DEFAULT_GLOBAL_PRELUDE_NAME)
    application_name = raw.get("application_name", DEFAULT_APPLICATION_PRELUDE_NAME)
    for key, value in (("global_name", global_name), ("application_name", application_name)):
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"preludes.{key} must be a non-empty string")

    dirs = tuple(
        _resolve_dir(entry, base_dir) for entry in _ensure_string_list(raw.get("dirs", []), "preludes.dirs")
    )
    return PreludeConfig(
        enabled=enabled,
        global_name=global_name.strip(),
        application_name=application_name.strip(),
        dirs=dirs,
    )


def _resolve_dir(entry: str, base_dir: Path) -> Path:
    path = Path(entry).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _ensure_string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)
