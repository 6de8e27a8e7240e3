"""Fund-trace extraction: the value movements a call trace actually performed."""

from __future__ import annotations

import logging

from ..models import ZERO_ADDRESS, CallKind, CallNode, LogEvent, TransferRecord, TransferSource
from .amounts import is_zero_value, parse_amount
from .log_decoder import decode_log
from .walk import DEFAULT_MAX_DEPTH, by_start_index, ensure_call_tree

logger = logging.getLogger(__name__)

NATIVE_TOKEN_ADDRESS = ZERO_ADDRESS


def extract_fund_traces(
    root: CallNode,
    *,
    native_token: str = NATIVE_TOKEN_ADDRESS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[TransferRecord]:
    """Collect native-value transfers and decoded token events in execution order.

    Each frame contributes its own value first, then its logs in declaration
    order, then its child frames by ``start_index``. The synthetic mint or
    burn ``Transfer`` a wrapped-native token emits next to its ``Deposit`` /
    ``Withdrawal`` is removed by :func:`dedupe_wrap_events` on that list,
    so a refund call between the two events does not separate them. The
    result is then stable-sorted by ``start_index``.

    Subtrees rooted at a failed frame contribute nothing. Zero amounts are
    never emitted and unparsable amounts are dropped.
    """
    root = ensure_call_tree(root, max_depth=max_depth)
    records: list[TransferRecord] = []
    stack: list[CallNode | LogEvent] = [root]
    while stack:
        item = stack.pop()
        if isinstance(item, LogEvent):
            record = _record_from_log(item)
            if record is not None:
                records.append(record)
            continue

        if item.failed:
            logger.debug("Skipping reverted subtree %s -> %s", item.from_address, item.to_address)
            continue
        record = _record_from_call(item, native_token)
        if record is not None:
            records.append(record)
        stack.extend(reversed(by_start_index(item.children)))
        stack.extend(reversed(item.logs))

    return by_start_index(dedupe_wrap_events(records))


def dedupe_wrap_events(records: list[TransferRecord]) -> list[TransferRecord]:
    """Drop a mint/burn ``Transfer`` immediately followed by its matching wrap event.

    Only the next record is examined; a match requires equal amounts, the
    zero address on the minted or burned side and the same counterparty.
    """
    kept: list[TransferRecord] = []
    for current, following in zip(records, [*records[1:], None]):
        if following is not None and _is_wrap_duplicate(current, following):
            continue
        kept.append(current)
    return kept


def _is_wrap_duplicate(current: TransferRecord, following: TransferRecord) -> bool:
    if current.source != TransferSource.TRANSFER or current.amount != following.amount:
        return False
    if following.source == TransferSource.DEPOSIT:
        return current.from_address == ZERO_ADDRESS and current.to_address == following.to_address
    if following.source == TransferSource.WITHDRAWAL:
        return current.to_address == ZERO_ADDRESS and current.from_address == following.from_address
    return False


def _record_from_call(call: CallNode, native_token: str) -> TransferRecord | None:
    # DELEGATECALL echoes the caller's value; counting it would double the movement
    if call.kind == CallKind.DELEGATECALL or is_zero_value(call.value):
        return None
    amount = parse_amount(call.value)
    if amount is None:
        logger.debug("Dropping call value %r: not a non-negative integer", call.value)
        return None
    return TransferRecord(
        from_address=call.from_address,
        to_address=call.to_address,
        amount=amount,
        token=native_token,
        source=TransferSource.CALL,
        start_index=call.start_index,
    )


def _record_from_log(log: LogEvent) -> TransferRecord | None:
    event = decode_log(log)
    if event is None:
        return None

    if event.name == "Transfer":
        source = TransferSource.TRANSFER
        sender, receiver, raw_amount = event.args["from"], event.args["to"], event.args["value"]
    elif event.name == "Withdrawal":
        source = TransferSource.WITHDRAWAL
        sender, receiver, raw_amount = event.args["src"], log.address, event.args["wad"]
    else:
        source = TransferSource.DEPOSIT
        sender, receiver, raw_amount = log.address, event.args["dst"], event.args["wad"]

    amount = parse_amount(raw_amount)
    if not amount:
        return None
    return TransferRecord(
        from_address=str(sender),
        to_address=str(receiver),
        amount=amount,
        token=log.address,
        source=source,
        start_index=log.start_index,
    )
