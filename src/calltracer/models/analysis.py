"""TraceAnalysis model: root container for everything derived from one trace."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .flow_graph import FundFlowGraph
from .keyed import KeyedCall
from .transfer import BalanceEntry, TransferRecord

CURRENT_SCHEMA_VERSION = "0.1.0"


class TraceAnalysis(BaseModel):
    """Keyed tree, fund traces, balance changes and fund flow of one transaction."""

    model_config = ConfigDict(extra="ignore")

    schema_version: str = CURRENT_SCHEMA_VERSION
    sender: str = ""
    receiver: str = ""
    tree: KeyedCall
    transfers: list[TransferRecord] = Field(default_factory=list)
    balances: list[BalanceEntry] = Field(default_factory=list)
    fund_flow: FundFlowGraph = Field(default_factory=FundFlowGraph)

    @property
    def has_balance_changes(self) -> bool:
        return bool(self.balances)

    @property
    def failed_calls(self) -> list[KeyedCall]:
        failed: list[KeyedCall] = []
        stack = [self.tree]
        while stack:
            call = stack.pop()
            if call.error:
                failed.append(call)
            stack.extend(reversed(call.calls))
        return failed
