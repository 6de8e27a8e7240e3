"""calltracer: fund-flow and call-tree analysis for decoded EVM call traces.

Convenience API (delegates to a default Analyzer instance):
    calltracer.configure(...)  -> set up default analyzer
    calltracer.analyze(...)    -> analyze one call trace

DI API (construct your own Analyzer):
    from calltracer.core import Analyzer, AnalyzerConfig, Lookups
    analyzer = Analyzer(config=AnalyzerConfig(...), lookups=Lookups(tags=...))
    analysis = analyzer.analyze(root)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .core import (
    Analyzer,
    AnalyzerConfig,
    Lookups,
    NativeToken,
    aggregate_balances,
    assign_keys,
    build_fund_flow,
    decode_log,
    extract_fund_traces,
    flatten,
)
from .core.lookups import LookupSource
from .exceptions import CalltracerError, CalltracerLoadError, InvalidTraceError
from .models import CallNode, TraceAnalysis

_default_analyzer: Analyzer | None = None


def configure(
    *,
    include_storage: bool = False,
    merge_factor: int = 2,
    trim_address: bool = False,
    trim_amount: bool = False,
    native_token: NativeToken | None = None,
    default_decimals: int = 18,
    tags: LookupSource[str] = None,
    fallback_tags: LookupSource[str] = None,
    symbols: LookupSource[str] = None,
    decimals: LookupSource[int] = None,
    links: LookupSource[str] = None,
) -> Analyzer:
    """Configure and return the default global Analyzer instance."""
    global _default_analyzer
    config = AnalyzerConfig(
        include_storage=include_storage,
        merge_factor=merge_factor,
        trim_address=trim_address,
        trim_amount=trim_amount,
        native_token=native_token or NativeToken(),
        default_decimals=default_decimals,
    )
    lookups = Lookups(
        tags=tags,
        fallback_tags=fallback_tags,
        symbols=symbols,
        decimals=decimals,
        links=links,
    )
    _default_analyzer = Analyzer(config=config, lookups=lookups)
    return _default_analyzer


def analyze(
    root: CallNode | Mapping[str, Any],
    *,
    sender: str | None = None,
    receiver: str | None = None,
) -> TraceAnalysis:
    """Analyze a call trace using the default Analyzer."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = Analyzer()
    return _default_analyzer.analyze(root, sender=sender, receiver=receiver)


def _reset_default_analyzer() -> None:
    """Reset the default analyzer. Used by test fixtures."""
    global _default_analyzer
    _default_analyzer = None


__all__ = [
    "Analyzer",
    "AnalyzerConfig",
    "CallNode",
    "CalltracerError",
    "CalltracerLoadError",
    "InvalidTraceError",
    "Lookups",
    "NativeToken",
    "TraceAnalysis",
    "aggregate_balances",
    "analyze",
    "assign_keys",
    "build_fund_flow",
    "configure",
    "decode_log",
    "extract_fund_traces",
    "flatten",
]
