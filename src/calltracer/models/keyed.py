"""Keyed call tree: the annotated copy of a call trace used for inspection."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .trace import DecodedEvent, StorageKind


class _KeyedBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str
    parent_error: bool = False
    start_index: int | None = None

    @property
    def depth(self) -> int:
        return self.key.count(".")


class KeyedLog(_KeyedBase):
    item_type: Literal["log"] = "log"
    address: str
    topics: list[str] = Field(default_factory=list)
    data: str = "0x"
    event: DecodedEvent | None = None


class KeyedStorage(_KeyedBase):
    item_type: Literal["storage"] = "storage"
    address: str
    slot: str
    kind: StorageKind
    value: str | None = None
    contract_name: str | None = None


class KeyedCall(_KeyedBase):
    """A call frame with its key, error status and execution-ordered children."""

    item_type: Literal["call"] = "call"
    kind: str
    from_address: str
    to_address: str
    value: str | int | None = None
    end_index: int | None = None
    error: bool = False
    error_message: str | None = None
    revert_reason: str | None = None
    function_name: str | None = None
    contract_name: str | None = None
    parent_function_name: str | None = None
    children: list[KeyedItem] = Field(default_factory=list)

    @property
    def calls(self) -> list[KeyedCall]:
        return [child for child in self.children if isinstance(child, KeyedCall)]

    @property
    def logs(self) -> list[KeyedLog]:
        return [child for child in self.children if isinstance(child, KeyedLog)]

    @property
    def storages(self) -> list[KeyedStorage]:
        return [child for child in self.children if isinstance(child, KeyedStorage)]

    @property
    def status(self) -> str:
        if self.error:
            return "failed"
        if self.parent_error:
            return "reverted"
        return "ok"


KeyedItem = Annotated[KeyedCall | KeyedLog | KeyedStorage, Field(discriminator="item_type")]

KeyedCall.model_rebuild()
