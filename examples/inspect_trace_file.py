"""Analyze a decoded call trace file with a DI-constructed Analyzer."""

from __future__ import annotations

import sys
from pathlib import Path

from calltracer.core import Analyzer, AnalyzerConfig, Lookups, external_calls, find_transaction_error
from calltracer.renderers import render_analysis
from calltracer.serializers import load_trace_json


def main(trace_file: str) -> None:
    analyzer = Analyzer(
        config=AnalyzerConfig(include_storage=True, trim_address=True, trim_amount=True),
        lookups=Lookups(links=lambda address: f"https://etherscan.io/address/{address}"),
    )
    root = external_calls(load_trace_json(Path(trace_file)))
    error = find_transaction_error(root)
    if error:
        print(f"Transaction failed: {error}")
    print(render_analysis(analyzer.analyze(root), verbosity="standard"))


if __name__ == "__main__":
    main(sys.argv[1])
