"""Fund-flow graph construction from extracted transfer records."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import FundFlowGraph, GraphEdge, GraphNode, TransferRecord
from .amounts import format_compact, format_units, trim_address
from .analyzer_config import AnalyzerConfig
from .balances import sort_participants
from .lookups import Lookups

LABEL_INFO_SUFFIX = "ⁱ"
HIGHLIGHT_NODE_COLOR = "#7EA7E9"
DEFAULT_NODE_COLOR = "#CDDDF7"


def build_fund_flow(
    records: Sequence[TransferRecord],
    *,
    sender: str | None = None,
    receiver: str | None = None,
    lookups: Lookups | None = None,
    config: AnalyzerConfig | None = None,
) -> FundFlowGraph:
    """Turn transfer records into participant nodes and numbered transfer edges.

    Records are merged per ``(from, to, token)`` when there are more than
    ``config.merge_factor`` records per distinct participant, which keeps
    high-hop traces readable. No records yields an empty graph.
    """
    config = config or AnalyzerConfig()
    lookups = lookups or Lookups()
    addresses = distinct_addresses(records)
    if not addresses:
        return FundFlowGraph()

    items = list(records)
    if len(items) > config.merge_factor * len(addresses):
        items = merge_transfers(items)

    sender_key = (sender or "").lower()
    receiver_key = (receiver or "").lower()
    nodes = [
        _build_node(address, sender_key, receiver_key, lookups, config) for address in addresses
    ]
    nodes = sort_participants(nodes, sender=sender_key, receiver=receiver_key)

    colors: dict[str, str] = {}
    edges: list[GraphEdge] = []
    for index, record in enumerate(items, start=1):
        token = record.token.lower()
        if token not in colors:
            colors[token] = config.palette[len(colors) % len(config.palette)]
        edges.append(_build_edge(index, record, colors[token], lookups, config))
    return FundFlowGraph(nodes=nodes, edges=edges)


def distinct_addresses(records: Sequence[TransferRecord]) -> list[str]:
    """Participants in first-seen order (``from`` before ``to`` within a record)."""
    seen: dict[str, None] = {}
    for record in records:
        seen.setdefault(record.from_address.lower(), None)
        seen.setdefault(record.to_address.lower(), None)
    return list(seen)


def merge_transfers(records: Sequence[TransferRecord]) -> list[TransferRecord]:
    """Sum records sharing ``(from, to, token)``; first occurrence fixes the order."""
    merged: dict[tuple[str, str, str], TransferRecord] = {}
    for record in records:
        key = (record.from_address.lower(), record.to_address.lower(), record.token.lower())
        previous = merged.get(key)
        if previous is None:
            merged[key] = record
        else:
            merged[key] = previous.model_copy(update={"amount": previous.amount + record.amount})
    return list(merged.values())


def collect_tag_addresses(
    records: Sequence[TransferRecord],
    *,
    native_token: str | None = None,
) -> list[str]:
    """Sorted unique addresses (participants and tokens) worth resolving tags for."""
    addresses: set[str] = set()
    native = (native_token or "").lower()
    for record in records:
        addresses.add(record.from_address.lower())
        addresses.add(record.to_address.lower())
        if record.token.lower() != native:
            addresses.add(record.token.lower())
    return sorted(addresses)


def node_label(address: str, lookups: Lookups, *, trim: bool = False) -> str:
    name = (lookups.tag(address) or "").replace("\x00", "")
    if not name:
        fallback = lookups.fallback_tag(address)
        if fallback:
            name = fallback + LABEL_INFO_SUFFIX
    if name:
        return name
    return trim_address(address) if trim else address


def token_label(token: str, lookups: Lookups, config: AnalyzerConfig) -> str:
    if token == config.native_token.address.lower():
        return config.native_token.symbol
    symbol = lookups.symbol(token)
    if symbol:
        return symbol.upper()
    return f"(Token {token[:4]}...{token[-4:]})"


def token_decimals(token: str, lookups: Lookups, config: AnalyzerConfig) -> int:
    if token == config.native_token.address.lower():
        return config.native_token.decimals
    decimals = lookups.decimals(token)
    return config.default_decimals if decimals is None else decimals


def _build_node(
    address: str,
    sender: str,
    receiver: str,
    lookups: Lookups,
    config: AnalyzerConfig,
) -> GraphNode:
    is_sender = bool(sender) and address == sender
    is_receiver = bool(receiver) and address == receiver
    return GraphNode(
        address=address,
        label=node_label(address, lookups, trim=config.trim_address),
        is_sender=is_sender,
        is_receiver=is_receiver,
        color=HIGHLIGHT_NODE_COLOR if is_sender or is_receiver else DEFAULT_NODE_COLOR,
        link=lookups.link(address),
    )


def _build_edge(
    index: int,
    record: TransferRecord,
    color: str,
    lookups: Lookups,
    config: AnalyzerConfig,
) -> GraphEdge:
    token = record.token.lower()
    display = format_units(record.amount, token_decimals(token, lookups, config))
    if config.trim_amount:
        display = format_compact(display)
    return GraphEdge(
        index=index,
        from_address=record.from_address.lower(),
        to_address=record.to_address.lower(),
        token=token,
        amount=record.amount,
        amount_display=display,
        token_label=token_label(token, lookups, config),
        color=color,
        link=lookups.link(token),
    )
