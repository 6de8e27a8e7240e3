"""Rich-based console rendering of a trace analysis."""

from __future__ import annotations

from io import StringIO
from typing import Literal

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.tree import Tree

from ..core.amounts import is_zero_value, trim_address
from ..models import KeyedCall, KeyedItem, KeyedLog, KeyedStorage, TraceAnalysis

Verbosity = Literal["minimal", "standard", "full"]
_MAX_VALUE_LEN = 200


def render_analysis(analysis: TraceAnalysis, *, verbosity: Verbosity = "standard") -> str:
    """Render the call tree, balance changes and fund flow as plain text."""
    sections: list[RenderableType] = [_build_tree(analysis.tree, verbosity)]
    if verbosity != "minimal":
        sections.append(_balances_table(analysis))
        sections.append(_fund_flow_table(analysis))
    return _export(Group(*sections))


def render_call_tree(tree: KeyedCall, *, verbosity: Verbosity = "standard") -> str:
    return _export(_build_tree(tree, verbosity))


def _export(renderable: RenderableType) -> str:
    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(renderable)
    return console.export_text()


def _build_tree(root: KeyedCall, verbosity: Verbosity) -> Tree:
    tree = Tree(_call_label(root))
    _add_details(tree, root, verbosity)
    stack: list[tuple[Tree, KeyedItem]] = [
        (tree, child) for child in reversed(root.children)
    ]
    while stack:
        parent, item = stack.pop()
        if isinstance(item, KeyedCall):
            branch = parent.add(_call_label(item))
            _add_details(branch, item, verbosity)
            stack.extend((branch, child) for child in reversed(item.children))
        elif isinstance(item, KeyedLog):
            if verbosity != "minimal":
                parent.add(_log_label(item, verbosity))
        elif isinstance(item, KeyedStorage):
            parent.add(_storage_label(item))
    return tree


def _call_label(call: KeyedCall) -> str:
    target = call.to_address
    if call.contract_name:
        target = f"{call.contract_name}({call.to_address})"
    function = f".{call.function_name}()" if call.function_name else ""
    line = f"{call.key} [{call.kind}] {call.from_address} → {target}{function} {_status_icon(call)}"
    if call.value and not is_zero_value(call.value):
        line += f" value={call.value}"
    return line


def _add_details(branch: Tree, call: KeyedCall, verbosity: Verbosity) -> None:
    if verbosity == "minimal" or not call.error:
        return
    reason = f" ({call.revert_reason})" if call.revert_reason else ""
    branch.add(f"error: {call.error_message}{reason}")


def _log_label(log: KeyedLog, verbosity: Verbosity) -> str:
    if log.event is not None:
        args = ", ".join(f"{name}={value}" for name, value in log.event.args.items())
        line = f"{log.key} event {log.event.name}({args}) @ {log.address}"
    else:
        line = f"{log.key} log @ {log.address} topics={len(log.topics)}"
    if verbosity == "full":
        line += f" data={_truncate(log.data)}"
    if log.parent_error:
        line += " ⊘"
    return line


def _storage_label(op: KeyedStorage) -> str:
    owner = op.contract_name or op.address
    value = f" = {op.value}" if op.value is not None else ""
    return f"{op.key} {op.kind} {owner}[{op.slot}]{value}"


def _balances_table(analysis: TraceAnalysis) -> Table:
    labels = {edge.token: edge.token_label for edge in analysis.fund_flow.edges}
    table = Table(title="Balance changes")
    table.add_column("Address")
    table.add_column("Token")
    table.add_column("Change", justify="right")
    for entry in analysis.balances:
        address = _participant(entry.address, analysis)
        for token, amount in entry.balances.items():
            table.add_row(address, labels.get(token, trim_address(token)), f"{amount:+d}")
            address = ""
    return table


def _fund_flow_table(analysis: TraceAnalysis) -> Table:
    labels = {node.address: node.label for node in analysis.fund_flow.nodes}
    table = Table(title="Fund flow")
    table.add_column("#", justify="right")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Amount", justify="right")
    table.add_column("Token")
    for edge in analysis.fund_flow.edges:
        table.add_row(
            str(edge.index),
            labels.get(edge.from_address, edge.from_address),
            labels.get(edge.to_address, edge.to_address),
            edge.amount_display,
            edge.token_label,
        )
    return table


def _participant(address: str, analysis: TraceAnalysis) -> str:
    if address == analysis.sender:
        return f"{address} [Sender]"
    if address == analysis.receiver:
        return f"{address} [Receiver]"
    return address


def _truncate(value: str) -> str:
    if len(value) <= _MAX_VALUE_LEN:
        return value
    return value[:_MAX_VALUE_LEN] + "... [truncated]"


def _status_icon(call: KeyedCall) -> str:
    if call.status == "failed":
        return "✗"
    if call.status == "reverted":
        return "⊘"
    return "✓"
