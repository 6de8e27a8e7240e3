"""Net balance changes per address and token."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar

from ..models import BalanceEntry, TransferRecord


class _HasAddress(Protocol):
    @property
    def address(self) -> str: ...


A = TypeVar("A", bound=_HasAddress)


def aggregate_balances(
    records: Iterable[TransferRecord],
    *,
    sender: str | None = None,
    receiver: str | None = None,
) -> list[BalanceEntry]:
    """Apply every record as a debit of ``from`` and a credit of ``to``.

    Tokens that net to exactly zero are omitted, and so are addresses left
    with no token at all. Entries keep first-seen order except that the
    transaction sender sorts first and the receiver second. An empty list
    means the transaction moved no value.
    """
    ledger: dict[str, dict[str, int]] = {}
    for record in records:
        if record.amount == 0:
            continue
        _apply(ledger, record.from_address, record.token, -record.amount)
        _apply(ledger, record.to_address, record.token, record.amount)

    entries = []
    for address, balances in ledger.items():
        nonzero = {token: amount for token, amount in balances.items() if amount != 0}
        if nonzero:
            entries.append(BalanceEntry(address=address, balances=nonzero))
    return sort_participants(entries, sender=sender, receiver=receiver)


def sort_participants(items: list[A], *, sender: str | None, receiver: str | None) -> list[A]:
    """Stable-sort so the sender comes first and the receiver second."""
    sender_key = (sender or "").lower()
    receiver_key = (receiver or "").lower()

    def rank(item: A) -> int:
        address = item.address.lower()
        if sender_key and address == sender_key:
            return 0
        if receiver_key and address == receiver_key:
            return 1
        return 2

    return sorted(items, key=rank)


def _apply(ledger: dict[str, dict[str, int]], address: str, token: str, delta: int) -> None:
    balances = ledger.setdefault(address.lower(), {})
    token_key = token.lower()
    balances[token_key] = balances.get(token_key, 0) + delta
