"""Serialization helpers."""

from .json import (
    analysis_from_json,
    analysis_to_json,
    load_analysis_json,
    load_trace_json,
    save_analysis_json,
    trace_from_json,
)

__all__ = [
    "analysis_from_json",
    "analysis_to_json",
    "load_analysis_json",
    "load_trace_json",
    "save_analysis_json",
    "trace_from_json",
]
