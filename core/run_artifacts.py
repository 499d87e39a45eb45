"""Run artifact helpers: JSONL result streams and JSON run reports."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Iterable

STATUS_SUCCESS = "success"
STATUS_PARTIAL = "partial_success"
STATUS_FAILED = "failed"


def final_status(total: int, succeeded: int) -> str:
    """Summarize a run from its number of attempted and successful items.

    A run with nothing to process counts as a success.
    """
    if total == 0:
        return STATUS_SUCCESS
    if succeeded <= 0:
        return STATUS_FAILED
    if succeeded < total:
        return STATUS_PARTIAL
    return STATUS_SUCCESS


def write_jsonl(records: Iterable[dict[str, Any]], output_file: str) -> int:
    """Stream records to a JSONL file, one object per line.

    Returns:
        Number of lines written.
    """
    parent = os.path.dirname(os.path.abspath(output_file))
    os.makedirs(parent, exist_ok=True)

    lines_written = 0
    with open(output_file, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            lines_written += 1
    return lines_written


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
