"""JSON serialization helpers for call traces and analyses."""

from __future__ import annotations

import json
import warnings
from pathlib import Path

from pydantic import ValidationError

from ..core.walk import call_tree_from_data
from ..exceptions import CalltracerLoadError, InvalidTraceError
from ..models import CURRENT_SCHEMA_VERSION, CallNode, TraceAnalysis


def trace_from_json(payload: str | bytes) -> CallNode:
    """Parse decoded call-trace JSON (camelCase keys) into a ``CallNode``.

    Frames are validated one at a time, so deep traces load without hitting
    pydantic's nested JSON limits.
    Raises ``CalltracerLoadError`` on invalid or unparseable input.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, RecursionError, ValueError) as exc:
        raise CalltracerLoadError(f"Failed to parse call trace JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise CalltracerLoadError(
            f"Failed to parse call trace JSON: expected an object, got {type(data).__name__}"
        )
    try:
        return call_tree_from_data(data)
    except InvalidTraceError as exc:
        raise CalltracerLoadError(f"Failed to parse call trace JSON: {exc}") from exc


def load_trace_json(path: str | Path) -> CallNode:
    """Load a call trace from a JSON file.

    Raises ``CalltracerLoadError`` on invalid content,
    or ``FileNotFoundError`` / ``OSError`` if the file is inaccessible.
    """
    payload = Path(path).read_text(encoding="utf-8")
    return trace_from_json(payload)


def analysis_to_json(analysis: TraceAnalysis, *, indent: int | None = 2) -> str:
    return analysis.model_dump_json(indent=indent)


def analysis_from_json(payload: str | bytes) -> TraceAnalysis:
    """Parse a JSON string into a TraceAnalysis.

    Raises ``CalltracerLoadError`` on invalid or unparseable input.
    Emits a warning if the schema version differs from the current one.
    """
    try:
        analysis = TraceAnalysis.model_validate_json(payload)
    except (json.JSONDecodeError, ValidationError, ValueError) as exc:
        raise CalltracerLoadError(f"Failed to parse analysis JSON: {exc}") from exc
    if analysis.schema_version != CURRENT_SCHEMA_VERSION:
        warnings.warn(
            f"Analysis schema version {analysis.schema_version!r} differs from "
            f"current {CURRENT_SCHEMA_VERSION!r}. "
            "Some fields may be missing or ignored.",
            stacklevel=2,
        )
    return analysis


def save_analysis_json(
    analysis: TraceAnalysis, path: str | Path, *, indent: int | None = 2
) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(analysis_to_json(analysis, indent=indent), encoding="utf-8")
    return output_path


def load_analysis_json(path: str | Path) -> TraceAnalysis:
    payload = Path(path).read_text(encoding="utf-8")
    return analysis_from_json(payload)
