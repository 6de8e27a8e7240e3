"""Core analysis pipelines."""

from .amounts import format_compact, format_units, parse_amount, trim_address
from .analyzer import Analyzer
from .analyzer_config import TOKEN_COLORS, AnalyzerConfig, NativeToken
from .balances import aggregate_balances, sort_participants
from .filters import (
    collect_addresses,
    external_calls,
    external_non_static_calls,
    filter_calls,
    find_transaction_error,
    without_static_calls,
)
from .flow_graph import build_fund_flow, collect_tag_addresses, merge_transfers
from .fund_trace import NATIVE_TOKEN_ADDRESS, dedupe_wrap_events, extract_fund_traces
from .keying import assign_keys, flatten
from .log_decoder import decode_log, encode_log, event_topic
from .lookups import Lookups
from .walk import DEFAULT_MAX_DEPTH, call_tree_from_data, ensure_call_tree

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "NATIVE_TOKEN_ADDRESS",
    "TOKEN_COLORS",
    "Analyzer",
    "AnalyzerConfig",
    "Lookups",
    "NativeToken",
    "aggregate_balances",
    "assign_keys",
    "build_fund_flow",
    "call_tree_from_data",
    "collect_addresses",
    "collect_tag_addresses",
    "decode_log",
    "dedupe_wrap_events",
    "encode_log",
    "ensure_call_tree",
    "event_topic",
    "external_calls",
    "external_non_static_calls",
    "extract_fund_traces",
    "filter_calls",
    "find_transaction_error",
    "flatten",
    "format_compact",
    "format_units",
    "merge_transfers",
    "parse_amount",
    "sort_participants",
    "trim_address",
    "without_static_calls",
]
