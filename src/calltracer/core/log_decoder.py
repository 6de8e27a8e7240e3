"""Decoding of the transfer-like events the engine understands."""

from __future__ import annotations

import logging
from typing import NamedTuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, keccak

from ..models import DecodedEvent, LogEvent

logger = logging.getLogger(__name__)


class _EventInput(NamedTuple):
    name: str
    type: str
    indexed: bool


class _EventAbi(NamedTuple):
    name: str
    inputs: tuple[_EventInput, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(item.type for item in self.inputs)})"

    @property
    def topic(self) -> str:
        return "0x" + keccak(text=self.signature).hex()


_EVENTS = (
    _EventAbi(
        "Transfer",
        (
            _EventInput("from", "address", True),
            _EventInput("to", "address", True),
            _EventInput("value", "uint256", False),
        ),
    ),
    _EventAbi(
        "Withdrawal",
        (_EventInput("src", "address", True), _EventInput("wad", "uint256", False)),
    ),
    _EventAbi(
        "Deposit",
        (_EventInput("dst", "address", True), _EventInput("wad", "uint256", False)),
    ),
)

EVENTS_BY_TOPIC: dict[str, _EventAbi] = {event.topic: event for event in _EVENTS}
_EVENTS_BY_NAME: dict[str, _EventAbi] = {event.name: event for event in _EVENTS}


def event_topic(name: str) -> str:
    """Return the ``topics[0]`` hash of a known event."""
    return _event_abi(name).topic


def decode_log(log: LogEvent) -> DecodedEvent | None:
    """Decode ``log`` if it is a Transfer, Withdrawal or Deposit event.

    Returns ``None`` for every other log, and for known signatures whose
    topics or data do not match the declared arguments (for example the
    ERC-721 ``Transfer``, which indexes its third argument).
    """
    if not log.topics:
        return None
    abi = EVENTS_BY_TOPIC.get(log.topics[0].lower())
    if abi is None:
        return None

    indexed = [item for item in abi.inputs if item.indexed]
    plain = [item for item in abi.inputs if not item.indexed]
    if len(log.topics) != len(indexed) + 1:
        return None

    try:
        topic_values = [
            decode([item.type], decode_hex(topic))[0]
            for item, topic in zip(indexed, log.topics[1:], strict=True)
        ]
        data_values = list(decode([item.type for item in plain], decode_hex(log.data or "0x")))
    except (DecodingError, TypeError, ValueError) as exc:
        logger.debug("Skipping undecodable %s log from %s: %s", abi.name, log.address, exc)
        return None

    args: dict[str, str | int] = {}
    topic_iter = iter(topic_values)
    data_iter = iter(data_values)
    for item in abi.inputs:
        value = next(topic_iter) if item.indexed else next(data_iter)
        args[item.name] = value.lower() if isinstance(value, str) else value
    return DecodedEvent(name=abi.name, args=args)


def encode_log(
    name: str,
    address: str,
    *args: object,
    start_index: int | None = None,
) -> LogEvent:
    """Build the raw ``LogEvent`` a contract would emit for a known event."""
    abi = _event_abi(name)
    if len(args) != len(abi.inputs):
        raise ValueError(f"{name} takes {len(abi.inputs)} arguments, got {len(args)}")

    topics = [abi.topic]
    data_types: list[str] = []
    data_values: list[object] = []
    for item, value in zip(abi.inputs, args, strict=True):
        if item.indexed:
            topics.append("0x" + encode([item.type], [value]).hex())
        else:
            data_types.append(item.type)
            data_values.append(value)
    return LogEvent(
        address=address,
        topics=topics,
        data="0x" + encode(data_types, data_values).hex(),
        start_index=start_index,
    )


def _event_abi(name: str) -> _EventAbi:
    try:
        return _EVENTS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown event {name!r}") from None
