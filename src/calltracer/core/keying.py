"""Stable keys for every frame, log and storage op of a call tree."""

from __future__ import annotations

from ..models import CallNode, KeyedCall, KeyedItem, KeyedLog, KeyedStorage, LogEvent, StorageOp
from .log_decoder import decode_log
from .walk import DEFAULT_MAX_DEPTH, ensure_call_tree, ordered_children

ROOT_KEY = "0"
_KEY_PREFIX = {"call": "c", "log": "e", "storage": "s"}


def assign_keys(
    root: CallNode,
    *,
    include_storage: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> KeyedCall:
    """Return a keyed copy of ``root`` with children in execution order.

    The root is keyed ``"0"``; descendants extend their parent's key with
    ``.c{i}``, ``.e{i}`` or ``.s{i}`` where ``i`` is the position in the
    parent's original ``calls``, ``logs`` or ``storages`` list. Keys are
    therefore independent of execution ordering. Everything below a failed
    frame is marked ``parent_error``.
    """
    root = ensure_call_tree(root, max_depth=max_depth)
    keyed_root = _keyed_call(root, ROOT_KEY, parent=None)
    stack: list[tuple[CallNode, KeyedCall]] = [(root, keyed_root)]
    while stack:
        node, keyed = stack.pop()
        inherited_error = keyed.error or keyed.parent_error
        for kind, index, item in ordered_children(node, include_storage=include_storage):
            key = f"{keyed.key}.{_KEY_PREFIX[kind]}{index}"
            if isinstance(item, CallNode):
                child = _keyed_call(item, key, parent=keyed)
                stack.append((item, child))
            elif isinstance(item, LogEvent):
                child = _keyed_log(item, key, inherited_error)
            else:
                child = _keyed_storage(item, key, inherited_error, keyed.contract_name)
            keyed.children.append(child)
    return keyed_root


def flatten(root: KeyedCall) -> list[KeyedItem]:
    """Pre-order list of a keyed tree: each frame, then its children in order."""
    items: list[KeyedItem] = []
    stack: list[KeyedItem] = [root]
    while stack:
        item = stack.pop()
        items.append(item)
        if isinstance(item, KeyedCall):
            stack.extend(reversed(item.children))
    return items


def _keyed_call(node: CallNode, key: str, parent: KeyedCall | None) -> KeyedCall:
    return KeyedCall(
        key=key,
        parent_error=bool(parent and (parent.error or parent.parent_error)),
        start_index=node.start_index,
        kind=node.kind,
        from_address=node.from_address,
        to_address=node.to_address,
        value=node.value,
        end_index=node.end_index,
        error=node.failed,
        error_message=node.error,
        revert_reason=node.revert_reason,
        function_name=node.function_name,
        contract_name=node.contract_name,
        parent_function_name=parent.function_name if parent else None,
    )


def _keyed_log(log: LogEvent, key: str, parent_error: bool) -> KeyedLog:
    return KeyedLog(
        key=key,
        parent_error=parent_error,
        start_index=log.start_index,
        address=log.address,
        topics=list(log.topics),
        data=log.data,
        event=decode_log(log),
    )


def _keyed_storage(
    op: StorageOp, key: str, parent_error: bool, contract_name: str | None
) -> KeyedStorage:
    return KeyedStorage(
        key=key,
        parent_error=parent_error,
        start_index=op.start_index,
        address=op.address,
        slot=op.slot,
        kind=op.kind,
        value=op.value,
        contract_name=contract_name,
    )
