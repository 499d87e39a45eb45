"""Core shared utilities: run configuration, logging context and run artifacts."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    resolve_log_level,
    set_run_id,
    unit_scope,
)
from core.extraction_config import (
    ConfigValidationError,
    ExtractionConfig,
    SourceSpec,
    load_extraction_config,
    resolve_source_path,
    resolve_strict_config_validation,
)
from core.run_artifacts import final_status, write_jsonl, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "resolve_log_level",
    "set_run_id",
    "unit_scope",
    "ConfigValidationError",
    "ExtractionConfig",
    "SourceSpec",
    "load_extraction_config",
    "resolve_source_path",
    "resolve_strict_config_validation",
    "final_status",
    "write_jsonl",
    "write_run_report",
]
