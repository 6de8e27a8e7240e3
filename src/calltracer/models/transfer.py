"""Derived value-movement models: transfer records and balance entries."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer


def _coerce_int(value: object) -> object:
    # amounts round-trip through JSON as decimal strings
    if isinstance(value, str) and value.lstrip("-").isdigit():
        return int(value)
    return value


Amount = Annotated[
    int,
    BeforeValidator(_coerce_int),
    PlainSerializer(lambda value: str(value), return_type=str, when_used="json"),
]


class TransferSource(StrEnum):
    CALL = "call"
    TRANSFER = "transfer"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransferRecord(BaseModel):
    """One value movement, either a native-coin call value or a decoded token event."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    from_address: str
    to_address: str
    amount: Amount
    token: str
    source: TransferSource
    start_index: int | None = None


class BalanceEntry(BaseModel):
    """Net signed balance change of one address, per token."""

    model_config = ConfigDict(strict=True, extra="ignore")

    address: str
    balances: dict[str, Amount]
