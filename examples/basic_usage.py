"""Basic usage example using the convenience API."""

from __future__ import annotations

from pathlib import Path

from calltracer import analyze, configure
from calltracer.core import encode_log
from calltracer.models import CallNode
from calltracer.renderers import render_analysis
from calltracer.serializers import save_analysis_json

TRADER = "0x" + "11" * 20
ROUTER = "0x" + "22" * 20
POOL = "0x" + "33" * 20
USDC = "0x" + "aa" * 20


def main() -> None:
    output_dir = Path("artifacts")
    output_dir.mkdir(exist_ok=True)
    configure(
        tags={TRADER: "Trader", ROUTER: "Router", POOL: "Pool"},
        symbols={USDC: "usdc"},
        decimals={USDC: 6},
    )

    root = CallNode(
        from_address=TRADER,
        to_address=ROUTER,
        value=10**18,
        function_name="swapExactETHForTokens",
        children=[
            CallNode(from_address=ROUTER, to_address=POOL, value=10**18, start_index=1),
            CallNode(
                from_address=POOL,
                to_address=USDC,
                start_index=2,
                function_name="transfer",
                logs=[encode_log("Transfer", USDC, POOL, TRADER, 2_500_000_000, start_index=3)],
            ),
        ],
    )

    analysis = analyze(root)
    output_path = save_analysis_json(analysis, output_dir / "swap_analysis.json")
    print(render_analysis(analysis, verbosity="full"))
    print(f"Analysis saved to: {output_path}")


if __name__ == "__main__":
    main()
