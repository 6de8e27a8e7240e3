"""Injected lookup collaborators (tags, token metadata, links)."""

from __future__ import annotations

import warnings
from collections.abc import Callable, Mapping
from typing import TypeVar

T = TypeVar("T")

LookupSource = Callable[[str], T | None] | Mapping[str, T] | None


class Lookups:
    """Address-keyed resolvers consumed by the fund-flow graph builder.

    Each source may be a callable, a mapping, or ``None``. Mapping keys are
    matched case-insensitively. A source that returns ``None`` (or raises)
    degrades to the caller's default; a raising source is reported through
    ``warnings.warn`` and never propagates.
    """

    def __init__(
        self,
        *,
        tags: LookupSource[str] = None,
        fallback_tags: LookupSource[str] = None,
        symbols: LookupSource[str] = None,
        decimals: LookupSource[int] = None,
        links: LookupSource[str] = None,
    ) -> None:
        self._tags = _as_callable(tags)
        self._fallback_tags = _as_callable(fallback_tags)
        self._symbols = _as_callable(symbols)
        self._decimals = _as_callable(decimals)
        self._links = _as_callable(links)

    def tag(self, address: str) -> str | None:
        return _resolve("tags", self._tags, address)

    def fallback_tag(self, address: str) -> str | None:
        return _resolve("fallback_tags", self._fallback_tags, address)

    def symbol(self, token: str) -> str | None:
        return _resolve("symbols", self._symbols, token)

    def decimals(self, token: str) -> int | None:
        value = _resolve("decimals", self._decimals, token)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def link(self, address: str) -> str | None:
        return _resolve("links", self._links, address)


def _as_callable(source: LookupSource[T]) -> Callable[[str], T | None] | None:
    if source is None:
        return None
    if isinstance(source, Mapping):
        normalized = {str(key).lower(): value for key, value in source.items()}
        return lambda address: normalized.get(address.lower())
    return source


def _resolve(name: str, source: Callable[[str], T | None] | None, address: str) -> T | None:
    if source is None or not address:
        return None
    try:
        return source(address)
    except Exception:
        warnings.warn(
            f"calltracer: {name} lookup failed for {address}. Falling back to defaults.",
            stacklevel=3,
        )
        return None
