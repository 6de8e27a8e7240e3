"""Traversal primitives shared by the extractor, the keyer and the filters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Literal, TypeVar

from pydantic import ValidationError

from ..exceptions import InvalidTraceError
from ..models import CallNode, LogEvent, StorageOp, TransferRecord

DEFAULT_MAX_DEPTH = 2048

_CHILD_KEYS = ("calls", "children")

T = TypeVar("T", CallNode, TransferRecord)

ChildKind = Literal["call", "log", "storage"]
Child = tuple[ChildKind, int, CallNode | LogEvent | StorageOp]


def ensure_call_tree(root: object, *, max_depth: int = DEFAULT_MAX_DEPTH) -> CallNode:
    """Coerce ``root`` into a ``CallNode`` and check that it is a finite tree.

    Mappings are validated as ``CallNode`` payloads. Raises
    ``InvalidTraceError`` for anything else, for a node reachable twice
    (cycles, shared subtrees) and for trees deeper than ``max_depth``.
    """
    if isinstance(root, Mapping):
        root = call_tree_from_data(root, max_depth=max_depth)
    if not isinstance(root, CallNode):
        raise InvalidTraceError(f"Call trace root must be a CallNode, got {type(root).__name__}")

    seen: set[int] = set()
    stack: list[tuple[CallNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if id(node) in seen:
            raise InvalidTraceError("Call trace is not a tree: a call frame is reachable twice")
        seen.add(id(node))
        if depth > max_depth:
            raise InvalidTraceError(f"Call trace exceeds the maximum depth of {max_depth}")
        stack.extend((child, depth + 1) for child in node.children)
    return root


def call_tree_from_data(
    data: Mapping[str, object], *, max_depth: int = DEFAULT_MAX_DEPTH
) -> CallNode:
    """Build a ``CallNode`` tree from camelCase trace data one frame at a time.

    Each frame is validated on its own, so deep traces do not run into
    pydantic's nested validation limits.
    """
    built: list[CallNode] = []
    stack: list[tuple[object, list[CallNode], int]] = [(data, built, 0)]
    while stack:
        raw, siblings, depth = stack.pop()
        if depth > max_depth:
            raise InvalidTraceError(f"Call trace exceeds the maximum depth of {max_depth}")
        if isinstance(raw, CallNode):
            siblings.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise InvalidTraceError(f"Call frame must be an object, got {type(raw).__name__}")
        try:
            node = CallNode.model_validate(
                {key: value for key, value in raw.items() if key not in _CHILD_KEYS}
            )
        except ValidationError as exc:
            raise InvalidTraceError(f"Invalid call frame: {exc}") from exc
        siblings.append(node)
        children = next((raw[key] for key in _CHILD_KEYS if key in raw), None)
        if children is None:
            continue
        if not isinstance(children, (list, tuple)):
            raise InvalidTraceError(
                f"Call frame children must be a list, got {type(children).__name__}"
            )
        stack.extend((child, node.children, depth + 1) for child in reversed(children))
    return built[0]


def ordered_children(call: CallNode, *, include_storage: bool = False) -> list[Child]:
    """Merge a frame's calls, logs and (optionally) storage ops into execution order.

    Entries are ``(kind, declaration_index, item)``. Items sort by
    ``start_index``; items without one sort last. The sort is stable, so
    ties keep declaration order.
    """
    entries: list[Child] = []
    if include_storage:
        entries.extend(("storage", index, op) for index, op in enumerate(call.storages))
    entries.extend(("call", index, child) for index, child in enumerate(call.children))
    entries.extend(("log", index, log) for index, log in enumerate(call.logs))
    return sorted(entries, key=lambda entry: _order_key(entry[2].start_index))


def by_start_index(items: Iterable[T]) -> list[T]:
    """Stable sort on ``start_index``; items without one sort last."""
    return sorted(items, key=lambda item: _order_key(item.start_index))


def _order_key(start_index: int | None) -> tuple[bool, int]:
    return (start_index is None, start_index or 0)
