"""Inspect subcommand implementation."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Literal

from ..core import Analyzer, AnalyzerConfig, external_calls, find_transaction_error
from ..exceptions import CalltracerLoadError, InvalidTraceError
from ..renderers import render_analysis
from ..serializers import analysis_to_json, load_trace_json, save_analysis_json

VerbosityArg = Literal["minimal", "standard", "full"]


def run_inspect(
    trace_file: Path,
    verbosity: VerbosityArg,
    *,
    sender: str | None = None,
    receiver: str | None = None,
    include_storage: bool = False,
    external_only: bool = False,
    as_json: bool = False,
    output_path: Path | None = None,
) -> int:
    if output_path is not None and not as_json:
        raise ValueError("--output is only supported when --json is provided")

    try:
        root = load_trace_json(trace_file)
    except FileNotFoundError:
        print(f"Error: file not found: {trace_file}", file=sys.stderr)
        return 1
    except CalltracerLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
        return 1

    analyzer = Analyzer(config=AnalyzerConfig(include_storage=include_storage))
    try:
        if external_only:
            root = external_calls(root)
        analysis = analyzer.analyze(root, sender=sender, receiver=receiver)
    except InvalidTraceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if as_json:
        if output_path is not None:
            save_analysis_json(analysis, output_path)
        else:
            print(analysis_to_json(analysis))
        return 0

    error = find_transaction_error(root)
    print(f"Sender: {analysis.sender or '<unknown>'}")
    print(f"Receiver: {analysis.receiver or '<unknown>'}")
    print(f"Status: {'failed: ' + error if error else 'success'}")
    print(f"Transfers: {len(analysis.transfers)}")
    print(f"Participants with balance changes: {len(analysis.balances)}")
    print()
    print(render_analysis(analysis, verbosity=verbosity))
    return 0
