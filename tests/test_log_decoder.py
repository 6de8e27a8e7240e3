from __future__ import annotations

import pytest

from calltracer.core import decode_log, encode_log, event_topic
from calltracer.models import ZERO_ADDRESS, LogEvent

SENDER = "0x" + "11" * 20
RECEIVER = "0x" + "22" * 20
TOKEN = "0x" + "aa" * 20

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def test_transfer_topic_matches_erc20_signature() -> None:
    assert event_topic("Transfer") == TRANSFER_TOPIC


def test_decode_transfer_event() -> None:
    log = encode_log("Transfer", TOKEN, SENDER, RECEIVER, 10**18)
    event = decode_log(log)

    assert event is not None
    assert event.name == "Transfer"
    assert event.args == {"from": SENDER, "to": RECEIVER, "value": 10**18}
    assert event.values == (SENDER, RECEIVER, 10**18)


def test_decode_deposit_and_withdrawal() -> None:
    deposit = decode_log(encode_log("Deposit", TOKEN, SENDER, 5))
    withdrawal = decode_log(encode_log("Withdrawal", TOKEN, RECEIVER, 7))

    assert deposit is not None and deposit.args == {"dst": SENDER, "wad": 5}
    assert withdrawal is not None and withdrawal.args == {"src": RECEIVER, "wad": 7}


def test_decoded_addresses_are_lower_case() -> None:
    holder = "0x" + "ab" * 20
    event = decode_log(encode_log("Transfer", TOKEN, holder, RECEIVER, 1))
    assert event is not None
    assert event.args["from"] == holder


def test_topic_match_is_case_insensitive() -> None:
    log = encode_log("Transfer", TOKEN, SENDER, RECEIVER, 3)
    topics = ["0x" + log.topics[0][2:].upper(), *log.topics[1:]]
    upper = log.model_copy(update={"topics": topics})
    assert decode_log(upper) is not None


def test_unknown_signature_is_not_decoded() -> None:
    log = LogEvent(address=TOKEN, topics=["0x" + "12" * 32], data="0x")
    assert decode_log(log) is None


def test_log_without_topics_is_not_decoded() -> None:
    assert decode_log(LogEvent(address=TOKEN)) is None


def test_erc721_transfer_with_indexed_token_id_is_rejected() -> None:
    log = encode_log("Transfer", TOKEN, SENDER, RECEIVER, 1)
    nft = LogEvent(
        address=TOKEN,
        topics=[*log.topics, "0x" + "00" * 31 + "01"],
        data="0x",
    )
    assert decode_log(nft) is None


def test_truncated_data_is_not_decoded() -> None:
    log = encode_log("Transfer", TOKEN, SENDER, RECEIVER, 1)
    broken = log.model_copy(update={"data": "0x01"})
    assert decode_log(broken) is None


def test_non_hex_data_is_not_decoded() -> None:
    log = encode_log("Transfer", TOKEN, ZERO_ADDRESS, RECEIVER, 1)
    broken = log.model_copy(update={"data": "0xzz"})
    assert decode_log(broken) is None


def test_encode_log_rejects_unknown_event_and_bad_arity() -> None:
    with pytest.raises(ValueError, match="Unknown event"):
        encode_log("Approval", TOKEN, SENDER, RECEIVER, 1)
    with pytest.raises(ValueError, match="takes 3 arguments"):
        encode_log("Transfer", TOKEN, SENDER, 1)
