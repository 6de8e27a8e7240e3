"""Call-frame filtering, error discovery and address collection."""

from __future__ import annotations

from collections.abc import Callable

from ..models import CallKind, CallNode, LogEvent
from .log_decoder import decode_log
from .walk import DEFAULT_MAX_DEPTH, ensure_call_tree, ordered_children

CallPredicate = Callable[[CallNode], bool]


def filter_calls(
    root: CallNode,
    predicate: CallPredicate,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CallNode:
    """Return a copy of ``root`` without the frames for which ``predicate`` is true.

    A removed frame's logs move to the nearest kept ancestor and its child
    frames are re-parented there. ``depth`` is recomputed for every kept
    frame. The root itself is always kept.
    """
    root = ensure_call_tree(root, max_depth=max_depth)
    new_root = _shell(root, depth=0)
    stack: list[tuple[CallNode, CallNode]] = [
        (child, new_root) for child in reversed(root.children)
    ]
    while stack:
        node, ancestor = stack.pop()
        if predicate(node):
            ancestor.logs.extend(node.logs)
            target = ancestor
        else:
            target = _shell(node, depth=ancestor.depth + 1)
            ancestor.children.append(target)
        stack.extend((child, target) for child in reversed(node.children))
    return new_root


def external_calls(root: CallNode) -> CallNode:
    """Drop internal ``JUMP`` frames."""
    return filter_calls(root, lambda call: call.is_internal)


def without_static_calls(root: CallNode) -> CallNode:
    """Drop ``STATICCALL`` frames."""
    return filter_calls(root, lambda call: call.kind == CallKind.STATICCALL)


def external_non_static_calls(root: CallNode) -> CallNode:
    return filter_calls(
        root, lambda call: call.is_internal or call.kind == CallKind.STATICCALL
    )


def find_transaction_error(root: CallNode) -> str:
    """First error text in pre-order, with the revert reason when known.

    A frame carrying only a ``revert_reason`` reports the bare reason. Once
    a frame yields text its subtree is not searched. Returns an empty
    string when no frame carries either.
    """
    root = ensure_call_tree(root)
    stack = [root]
    while stack:
        node = stack.pop()
        text = node.error or ""
        if node.revert_reason:
            text = f"{text} ({node.revert_reason})" if text else f"({node.revert_reason})"
        if text:
            return text
        stack.extend(reversed(node.children))
    return ""


def collect_addresses(root: CallNode) -> list[str]:
    """Every address a trace touches, in first-seen execution order.

    Covers ``from`` / ``to`` of every frame, every log emitter and the
    address arguments of recognized transfer events.
    """
    root = ensure_call_tree(root)
    seen: dict[str, None] = {}
    stack: list[CallNode | LogEvent] = [root]
    while stack:
        item = stack.pop()
        if isinstance(item, LogEvent):
            _remember(seen, item.address)
            event = decode_log(item)
            if event is not None:
                for value in event.values:
                    if isinstance(value, str):
                        _remember(seen, value)
            continue
        _remember(seen, item.from_address)
        _remember(seen, item.to_address)
        stack.extend(reversed([child for _, _, child in ordered_children(item)]))
    return list(seen)


def _remember(seen: dict[str, None], address: str) -> None:
    if address:
        seen.setdefault(address.lower(), None)


def _shell(node: CallNode, *, depth: int) -> CallNode:
    return node.model_copy(
        update={
            "depth": depth,
            "children": [],
            "logs": list(node.logs),
            "storages": list(node.storages),
        }
    )
