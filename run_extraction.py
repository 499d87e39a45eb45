#!/usr/bin/env python3
"""
Declaration extraction runner for C# and VB.NET sources.

Extracts every class, interface, struct and enum with its documented members
and streams one JSON object per source file to a JSONL file, then writes a
run report.

Usage:
    python run_extraction.py --source ./src
    python run_extraction.py --source ./Legacy --grammar vb --output-file out/legacy.jsonl
    python run_extraction.py --config docextract.yaml --log-level DEBUG
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, Iterator, List, Optional, Sequence

from core.extraction_config import (
    DEFAULT_OUTPUT_FILE,
    DEFAULT_REPORT_DIR,
    ConfigValidationError,
    ExtractionConfig,
    SourceSpec,
    load_extraction_config,
    resolve_source_path,
    resolve_strict_config_validation,
)
from core.run_artifacts import final_status, write_jsonl, write_run_report
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from docextract.extractor import ExtractionStats, iter_extract_results
from docextract.grammars import SUPPORTED_GRAMMARS

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="C# / VB.NET declaration and documentation extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extraction.py --source ./src\n"
            "  python run_extraction.py --source ./Legacy --grammar vb\n"
            "  python run_extraction.py --config docextract.yaml\n"
        ),
    )

    parser.add_argument(
        "--source",
        action="append",
        default=[],
        help="File or directory to extract from. May be repeated. Overrides config sources.",
    )
    parser.add_argument(
        "--grammar",
        choices=SUPPORTED_GRAMMARS,
        default=None,
        help="Force a grammar instead of choosing one per file extension.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML/JSON extraction config.",
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help=f"Path for the JSONL output. Default: {DEFAULT_OUTPUT_FILE}",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help=f"Directory for the JSON run report. Default: {DEFAULT_REPORT_DIR}",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=False,
        help="Stop at the first file that cannot be extracted.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: config value or INFO.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=resolve_strict_config_validation(default=False),
        help=(
            "Fail on any config problem instead of falling back to defaults. "
            "Can also be enabled with DOCEXTRACT_STRICT_CONFIG=true."
        ),
    )

    return parser.parse_args(argv)


def resolve_sources(args: argparse.Namespace, config: ExtractionConfig) -> List[SourceSpec]:
    """Combine command-line and config sources.

    Command-line sources replace the configured ones. ``--grammar`` applies
    to every source that does not name its own grammar.
    """
    if args.source:
        return [SourceSpec(path=path, grammar=args.grammar) for path in args.source]

    return [
        SourceSpec(
            path=str(resolve_source_path(config, spec)),
            grammar=spec.grammar or args.grammar,
        )
        for spec in config.sources
    ]


def execute_extraction(
    *,
    sources: Sequence[SourceSpec],
    output_file: str,
    continue_on_error: bool,
    exclude_dirs: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Extract every source and stream the results to ``output_file``.

    Returns:
        The run report payload.
    """
    stats = ExtractionStats()
    source_reports: List[Dict[str, Any]] = []
    declaration_errors: List[Dict[str, Any]] = []

    def _records() -> Iterator[Dict[str, Any]]:
        for spec in sources:
            report: Dict[str, Any] = {"path": spec.path, "grammar": spec.grammar, "units": 0}
            source_reports.append(report)
            try:
                for result in iter_extract_results(
                    spec.path,
                    grammar=spec.grammar,
                    continue_on_error=continue_on_error,
                    exclude_dirs=exclude_dirs,
                    stats=stats,
                ):
                    report["units"] += 1
                    declaration_errors.extend(error.to_dict() for error in result.errors)
                    yield result.to_dict()
            except (FileNotFoundError, ValueError) as exc:
                report["status"] = "failed"
                report["error"] = str(exc)
                logger.error("Source failed: path=%s error=%s", spec.path, exc)
                if not continue_on_error:
                    raise
                continue
            report["status"] = "success"

    logger.info("Output file      : %s", os.path.abspath(output_file))
    with phase_scope("extract"):
        units_written = write_jsonl(_records(), output_file)

    failed_sources = sum(1 for report in source_reports if report.get("status") == "failed")
    total = stats.files_processed + stats.files_failed + failed_sources

    logger.info("Wrote %d units to %s", units_written, output_file)
    logger.info("Extraction stats: %s", stats)

    return {
        "sources": source_reports,
        "stats": stats.to_dict(),
        "declaration_errors": declaration_errors,
        "output_file": output_file,
        "units_written": units_written,
        "status": final_status(total, stats.files_processed),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)

    try:
        config = (
            load_extraction_config(args.config, strict=args.strict_config, known_grammars=SUPPORTED_GRAMMARS)
            if args.config
            else ExtractionConfig()
        )
    except ConfigValidationError as exc:
        configure_structured_logging(level=logging.INFO)
        logger.error("Invalid configuration: %s", exc)
        return 1

    configure_structured_logging(level=args.log_level or config.log_level)
    run_id = set_run_id()
    report_dir = args.report_dir or config.report_dir
    output_file = args.output_file or config.output_file

    run_report: Dict[str, Any] = {
        "run_id": run_id,
        "pipeline": "docextract",
        "status": "failed",
    }

    sources = resolve_sources(args, config)
    if not sources:
        logger.error("No sources given. Use --source or a config file with 'sources'.")
        return 1

    try:
        result = execute_extraction(
            sources=sources,
            output_file=output_file,
            continue_on_error=config.continue_on_error and not args.fail_fast,
            exclude_dirs=config.exclude_dirs,
        )
        run_report.update(result)
        report_path = write_run_report(run_report, run_id, output_dir=report_dir)
        logger.info("Run report written: %s", report_path)
    except Exception as exc:
        run_report["error"] = str(exc)
        report_path = write_run_report(run_report, run_id, output_dir=report_dir)
        logger.info("Run report written: %s", report_path)
        logger.error("Extraction failed: %s", exc, exc_info=True)
        return 1

    return 1 if run_report["status"] == "failed" else 0


if __name__ == "__main__":
    sys.exit(main())
