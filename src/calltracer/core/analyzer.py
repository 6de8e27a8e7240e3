"""Analyzer: the primary DI-constructed entry point for trace analysis."""

from __future__ import annotations

import logging

from ..models import BalanceEntry, CallNode, FundFlowGraph, KeyedCall, TraceAnalysis, TransferRecord
from .analyzer_config import AnalyzerConfig
from .balances import aggregate_balances
from .flow_graph import build_fund_flow
from .fund_trace import extract_fund_traces
from .keying import assign_keys
from .lookups import Lookups
from .walk import ensure_call_tree

logger = logging.getLogger(__name__)


class Analyzer:
    """Owns its config and lookups. Construct via DI or use the convenience layer.

    Error-handling contract
    ----------------------
    - Configuration errors (invalid ``AnalyzerConfig``) raise immediately.
    - A malformed, cyclic or over-deep trace raises ``InvalidTraceError``
      before any work is done.
    - Semantically unexpected input (unknown events, missing token metadata,
      failing lookups) degrades to defaults and never raises.
    """

    def __init__(self, config: AnalyzerConfig | None = None, lookups: Lookups | None = None) -> None:
        self.config = config or AnalyzerConfig()
        self.lookups = lookups or Lookups()

    def fund_traces(self, root: CallNode) -> list[TransferRecord]:
        return extract_fund_traces(
            root,
            native_token=self.config.native_token.address,
            max_depth=self.config.max_depth,
        )

    def balances(
        self, root: CallNode, *, sender: str | None = None, receiver: str | None = None
    ) -> list[BalanceEntry]:
        root = ensure_call_tree(root, max_depth=self.config.max_depth)
        sender, receiver = _participants(root, sender, receiver)
        return aggregate_balances(self.fund_traces(root), sender=sender, receiver=receiver)

    def fund_flow(
        self, root: CallNode, *, sender: str | None = None, receiver: str | None = None
    ) -> FundFlowGraph:
        root = ensure_call_tree(root, max_depth=self.config.max_depth)
        sender, receiver = _participants(root, sender, receiver)
        return build_fund_flow(
            self.fund_traces(root),
            sender=sender,
            receiver=receiver,
            lookups=self.lookups,
            config=self.config,
        )

    def keyed_tree(self, root: CallNode) -> KeyedCall:
        return assign_keys(
            root,
            include_storage=self.config.include_storage,
            max_depth=self.config.max_depth,
        )

    def analyze(
        self,
        root: CallNode,
        *,
        sender: str | None = None,
        receiver: str | None = None,
    ) -> TraceAnalysis:
        """Run every pipeline over one trace.

        ``sender`` and ``receiver`` default to the root frame's ``from`` and
        ``to``. ``root`` may also be a mapping in the trace JSON shape.
        """
        root = ensure_call_tree(root, max_depth=self.config.max_depth)
        sender, receiver = _participants(root, sender, receiver)
        records = self.fund_traces(root)
        logger.debug("Extracted %d fund traces", len(records))
        return TraceAnalysis(
            sender=sender,
            receiver=receiver,
            tree=self.keyed_tree(root),
            transfers=records,
            balances=aggregate_balances(records, sender=sender, receiver=receiver),
            fund_flow=build_fund_flow(
                records,
                sender=sender,
                receiver=receiver,
                lookups=self.lookups,
                config=self.config,
            ),
        )


def _participants(root: CallNode, sender: str | None, receiver: str | None) -> tuple[str, str]:
    return (sender or root.from_address).lower(), (receiver or root.to_address).lower()
