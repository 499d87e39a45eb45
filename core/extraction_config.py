"""Extraction run configuration.

Loads the optional YAML/JSON file that describes which sources to extract
and where results go. In strict mode every problem raises
``ConfigValidationError``; otherwise problems are logged and the affected
setting falls back to its default.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

STRICT_CONFIG_ENV = "DOCEXTRACT_STRICT_CONFIG"
DEFAULT_OUTPUT_FILE = "output/declarations.jsonl"
DEFAULT_REPORT_DIR = "output/run_reports"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CONTINUE_ON_ERROR = True
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class SourceSpec:
    """One file or directory to extract."""

    path: str
    grammar: str | None = None


@dataclass(frozen=True)
class ExtractionConfig:
    """Top-level extraction configuration."""

    sources: list[SourceSpec] = field(default_factory=list)
    exclude_dirs: tuple[str, ...] | None = None
    output_file: str = DEFAULT_OUTPUT_FILE
    report_dir: str = DEFAULT_REPORT_DIR
    continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR
    log_level: str = DEFAULT_LOG_LEVEL
    base_dir: str = "."


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``DOCEXTRACT_STRICT_CONFIG`` env."""
    return _env_flag(STRICT_CONFIG_ENV, default=default)


def _reject(msg: str, strict: bool, fallback: str = "using defaults") -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; %s", msg, fallback)


def _load_payload(path: str, strict: bool) -> dict[str, Any]:
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if strict:
            raise ConfigValidationError(f"Config file not found: {config_path}") from exc
        logger.warning("Config file not found: %s; continuing with defaults", config_path)
        return {}

    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"Failed to parse config at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        _reject(f"Config file is empty: {config_path}", strict)
        return {}
    if not isinstance(payload, dict):
        _reject(f"Unexpected config payload type: {type(payload).__name__}", strict)
        return {}
    return payload


def _parse_source(
    raw: Any,
    strict: bool,
    known_grammars: tuple[str, ...] | None,
) -> SourceSpec | None:
    if isinstance(raw, str):
        raw = {"path": raw}
    if not isinstance(raw, dict):
        _reject(f"Source entry must be a path or an object, got {type(raw).__name__}", strict, "skipping")
        return None

    path = str(raw.get("path", "")).strip()
    if not path:
        _reject("Source entry is missing 'path'", strict, "skipping")
        return None

    grammar = raw.get("grammar")
    if grammar is not None:
        grammar = str(grammar).strip().lower()
        if known_grammars is not None and grammar not in known_grammars:
            _reject(
                f"Source '{path}': unknown grammar '{grammar}' (expected one of {list(known_grammars)})",
                strict,
                "detecting grammar per file",
            )
            grammar = None

    return SourceSpec(path=path, grammar=grammar)


def _parse_sources(
    payload: dict[str, Any],
    strict: bool,
    known_grammars: tuple[str, ...] | None,
) -> list[SourceSpec]:
    raw_sources = payload.get("sources", [])
    if not isinstance(raw_sources, list):
        _reject("'sources' must be a list", strict, "ignoring it")
        return []

    sources = []
    for raw in raw_sources:
        spec = _parse_source(raw, strict, known_grammars)
        if spec is not None:
            sources.append(spec)
    return sources


def _parse_exclude_dirs(payload: dict[str, Any], strict: bool) -> tuple[str, ...] | None:
    raw = payload.get("exclude_dirs")
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        _reject("'exclude_dirs' must be a list of directory names", strict)
        return None
    return tuple(item.strip() for item in raw if item.strip())


def _parse_log_level(payload: dict[str, Any], strict: bool) -> str:
    level = str(payload.get("log_level", DEFAULT_LOG_LEVEL)).strip().upper()
    if level not in _LOG_LEVELS:
        _reject(f"Unknown log_level '{level}'", strict, f"using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return level


def _parse_bool(payload: dict[str, Any], key: str, default: bool, strict: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        _reject(f"'{key}' must be true or false", strict, f"using {default}")
        return default
    return value


def load_extraction_config(
    path: str,
    strict: bool = False,
    known_grammars: Iterable[str] | None = None,
) -> ExtractionConfig:
    """Load extraction configuration from a YAML or JSON file.

    Args:
        path: Config file path. ``.json`` files are read as JSON, anything
            else as YAML.
        strict: Raise on any problem instead of falling back to defaults.
        known_grammars: Grammar names a source entry may name. When None,
            any grammar name is accepted.

    Returns:
        The validated configuration. Relative source paths are resolved
        later against ``base_dir``, the directory of the config file.

    Raises:
        ConfigValidationError: In strict mode, when the file is missing,
            unparsable or holds invalid values.
    """
    payload = _load_payload(path, strict)
    grammars = tuple(known_grammars) if known_grammars is not None else None

    return ExtractionConfig(
        sources=_parse_sources(payload, strict, grammars),
        exclude_dirs=_parse_exclude_dirs(payload, strict),
        output_file=str(payload.get("output_file") or DEFAULT_OUTPUT_FILE),
        report_dir=str(payload.get("report_dir") or DEFAULT_REPORT_DIR),
        continue_on_error=_parse_bool(payload, "continue_on_error", DEFAULT_CONTINUE_ON_ERROR, strict),
        log_level=_parse_log_level(payload, strict),
        base_dir=str(Path(path).resolve().parent),
    )


def resolve_source_path(config: ExtractionConfig, source: SourceSpec) -> Path:
    """Resolve a source path relative to the config file directory if needed."""
    raw = Path(source.path)
    return raw if raw.is_absolute() else (Path(config.base_dir) / raw)
