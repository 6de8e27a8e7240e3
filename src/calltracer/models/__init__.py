"""Data models for call traces and the artifacts derived from them."""

from .analysis import CURRENT_SCHEMA_VERSION, TraceAnalysis
from .flow_graph import FundFlowGraph, GraphEdge, GraphNode
from .keyed import KeyedCall, KeyedItem, KeyedLog, KeyedStorage
from .trace import ZERO_ADDRESS, CallKind, CallNode, DecodedEvent, LogEvent, StorageKind, StorageOp
from .transfer import Amount, BalanceEntry, TransferRecord, TransferSource

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "ZERO_ADDRESS",
    "Amount",
    "BalanceEntry",
    "CallKind",
    "CallNode",
    "DecodedEvent",
    "FundFlowGraph",
    "GraphEdge",
    "GraphNode",
    "KeyedCall",
    "KeyedItem",
    "KeyedLog",
    "KeyedStorage",
    "LogEvent",
    "StorageKind",
    "StorageOp",
    "TraceAnalysis",
    "TransferRecord",
    "TransferSource",
]
