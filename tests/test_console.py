from __future__ import annotations

from calltracer import analyze, configure
from calltracer.core import encode_log
from calltracer.models import CallNode, StorageOp
from calltracer.renderers import render_analysis, render_call_tree

SENDER = "0x" + "11" * 20
RECEIVER = "0x" + "22" * 20
POOL = "0x" + "33" * 20
TOKEN = "0x" + "aa" * 20


def _build_trace() -> CallNode:
    return CallNode(
        from_address=SENDER,
        to_address=RECEIVER,
        function_name="execute",
        children=[
            CallNode(
                from_address=RECEIVER,
                to_address=POOL,
                start_index=1,
                error="execution reverted",
                revert_reason="STF",
                children=[CallNode(from_address=POOL, to_address=TOKEN, start_index=2)],
            ),
        ],
        logs=[encode_log("Transfer", TOKEN, SENDER, RECEIVER, 10**18, start_index=5)],
        storages=[StorageOp(address=RECEIVER, slot="0x01", value="0x02", start_index=0)],
    )


def test_render_standard_includes_tree_and_tables() -> None:
    configure(tags={SENDER: "Alice", RECEIVER: "Router"}, symbols={TOKEN: "tkn"})
    output = render_analysis(analyze(_build_trace()), verbosity="standard")

    assert "0 [CALL]" in output
    assert ".execute()" in output
    assert "0.c0 [CALL]" in output
    assert "✗" in output
    assert "⊘" in output
    assert "error: execution reverted (STF)" in output
    assert "event Transfer(" in output
    assert "Balance changes" in output
    assert "Fund flow" in output
    assert "Alice" in output
    assert "TKN" in output


def test_render_minimal_hides_logs_and_tables() -> None:
    output = render_analysis(analyze(_build_trace()), verbosity="minimal")

    assert "0.c0 [CALL]" in output
    assert "event Transfer" not in output
    assert "error:" not in output
    assert "Balance changes" not in output


def test_render_full_includes_log_data() -> None:
    output = render_analysis(analyze(_build_trace()), verbosity="full")
    assert "data=0x" in output


def test_render_storage_when_included() -> None:
    configure(include_storage=True)
    output = render_call_tree(analyze(_build_trace()).tree)
    assert "0.s0 SLOAD" in output
