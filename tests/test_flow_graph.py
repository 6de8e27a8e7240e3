from __future__ import annotations

import warnings

from calltracer.core import (
    TOKEN_COLORS,
    AnalyzerConfig,
    Lookups,
    build_fund_flow,
    collect_tag_addresses,
)
from calltracer.models import ZERO_ADDRESS, TransferRecord, TransferSource

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b0" * 20
CAROL = "0x" + "c0" * 20
TOKEN = "0x" + "aa" * 20
USDC = "0x" + "dd" * 20


def _record(sender: str, receiver: str, amount: int, token: str = TOKEN) -> TransferRecord:
    return TransferRecord(
        from_address=sender,
        to_address=receiver,
        amount=amount,
        token=token,
        source=TransferSource.TRANSFER,
    )


def test_no_records_give_empty_graph() -> None:
    graph = build_fund_flow([], sender=ALICE, receiver=BOB)
    assert graph.is_empty
    assert graph.edges == []


def test_many_records_over_few_addresses_are_merged() -> None:
    records = [_record(ALICE, BOB, 1) for _ in range(5)] + [_record(BOB, CAROL, 2) for _ in range(5)]
    graph = build_fund_flow(records, sender=ALICE, receiver=BOB)

    assert [(edge.from_address, edge.to_address, edge.amount) for edge in graph.edges] == [
        (ALICE, BOB, 5),
        (BOB, CAROL, 10),
    ]
    assert [record.amount for record in records] == [1] * 5 + [2] * 5


def test_few_records_are_not_merged() -> None:
    records = [_record(ALICE, BOB, 1), _record(ALICE, BOB, 1), _record(BOB, CAROL, 2), _record(BOB, CAROL, 2)]
    graph = build_fund_flow(records, sender=ALICE, receiver=BOB)

    assert len(graph.edges) == 4
    assert [edge.index for edge in graph.edges] == [1, 2, 3, 4]


def test_nodes_put_sender_and_receiver_first_and_highlight_them() -> None:
    graph = build_fund_flow([_record(CAROL, BOB, 1), _record(BOB, ALICE, 1)], sender=ALICE, receiver=BOB)

    assert [node.address for node in graph.nodes] == [ALICE, BOB, CAROL]
    assert graph.nodes[0].is_sender and not graph.nodes[0].is_receiver
    assert graph.nodes[1].is_receiver
    assert graph.nodes[0].color == graph.nodes[1].color != graph.nodes[2].color


def test_node_labels_prefer_tags_then_fallback_then_address() -> None:
    lookups = Lookups(
        tags={ALICE.upper().replace("0X", "0x"): "Alice\x00"},
        fallback_tags={BOB: "Bob"},
    )
    graph = build_fund_flow(
        [_record(ALICE, BOB, 1), _record(BOB, CAROL, 1)],
        sender=ALICE,
        receiver=BOB,
        lookups=lookups,
    )
    labels = {node.address: node.label for node in graph.nodes}

    assert labels == {ALICE: "Alice", BOB: "Bobⁱ", CAROL: CAROL}


def test_trim_address_shortens_untagged_labels() -> None:
    graph = build_fund_flow(
        [_record(ALICE, BOB, 1)],
        sender=ALICE,
        receiver=BOB,
        config=AnalyzerConfig(trim_address=True),
    )
    assert graph.nodes[0].label == "0xa1a1...a1a1"


def test_edge_amounts_use_token_decimals_and_labels() -> None:
    lookups = Lookups(symbols={USDC: "usdc"}, decimals={USDC: 6})
    records = [
        _record(ALICE, BOB, 1_500_000, token=USDC),
        _record(ALICE, BOB, 2 * 10**18, token=ZERO_ADDRESS),
        _record(BOB, ALICE, 10**17),
    ]
    graph = build_fund_flow(records, sender=ALICE, receiver=BOB, lookups=lookups)

    assert [edge.amount_display for edge in graph.edges] == ["1.5", "2", "0.1"]
    assert [edge.token_label for edge in graph.edges] == ["USDC", "ETH", "(Token 0xaa...aaaa)"]


def test_trim_amount_uses_compact_notation() -> None:
    graph = build_fund_flow(
        [_record(ALICE, BOB, 1_234_500 * 10**18)],
        config=AnalyzerConfig(trim_amount=True),
    )
    assert graph.edges[0].amount_display == "1.23M"


def test_colors_follow_first_seen_token() -> None:
    records = [_record(ALICE, BOB, 1), _record(ALICE, BOB, 1, token=USDC), _record(BOB, ALICE, 1)]
    graph = build_fund_flow(records)

    assert [edge.color for edge in graph.edges] == [TOKEN_COLORS[0], TOKEN_COLORS[1], TOKEN_COLORS[0]]


def test_links_come_from_lookup() -> None:
    graph = build_fund_flow(
        [_record(ALICE, BOB, 1)],
        lookups=Lookups(links=lambda address: f"https://explorer.test/address/{address}"),
    )
    assert graph.nodes[0].link == f"https://explorer.test/address/{ALICE}"
    assert graph.edges[0].link == f"https://explorer.test/address/{TOKEN}"


def test_raising_lookup_degrades_with_warning() -> None:
    def broken(address: str) -> str:
        raise RuntimeError("tag service down")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        graph = build_fund_flow([_record(ALICE, BOB, 1)], lookups=Lookups(tags=broken, decimals=broken))

    assert graph.nodes[0].label == ALICE
    assert graph.edges[0].amount_display == "0.000000000000000001"
    assert any("lookup failed" in str(w.message) for w in caught)


def test_collect_tag_addresses_is_sorted_and_unique() -> None:
    records = [_record(BOB, ALICE, 1), _record(ALICE, BOB, 1, token=ZERO_ADDRESS)]
    assert collect_tag_addresses(records, native_token=ZERO_ADDRESS) == sorted([ALICE, BOB, TOKEN])
