"""Input models for a decoded EVM call trace."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class CallKind(StrEnum):
    CALL = "CALL"
    STATICCALL = "STATICCALL"
    DELEGATECALL = "DELEGATECALL"
    CALLCODE = "CALLCODE"
    CREATE = "CREATE"
    CREATE2 = "CREATE2"


class StorageKind(StrEnum):
    SLOAD = "SLOAD"
    SSTORE = "SSTORE"


_TRACE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _lower(value: object) -> object:
    if isinstance(value, str):
        return value.lower()
    if value is None:
        return ""
    return value


Address = Annotated[str, BeforeValidator(_lower)]


class DecodedEvent(BaseModel):
    """A recognized transfer-like event with its arguments in declared order."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: dict[str, str | int]

    @property
    def values(self) -> tuple[str | int, ...]:
        return tuple(self.args.values())


class LogEvent(BaseModel):
    """A single event emitted by a call frame."""

    model_config = _TRACE_CONFIG

    address: Address = ""
    topics: list[str] = Field(default_factory=list)
    data: str = "0x"
    start_index: int | None = None
    decoded_name: str | None = None
    decoded_args: dict[str, str | int] | None = None


class StorageOp(BaseModel):
    """A storage read or write observed inside a call frame."""

    model_config = _TRACE_CONFIG

    address: Address = ""
    slot: str
    kind: StorageKind = Field(default=StorageKind.SLOAD, alias="type")
    value: str | None = None
    start_index: int | None = None


class CallNode(BaseModel):
    """One EVM call frame and everything it emitted."""

    model_config = _TRACE_CONFIG

    kind: str = Field(default=CallKind.CALL.value, alias="type")
    from_address: Address = Field(default="", alias="from")
    to_address: Address = Field(default="", alias="to")
    value: str | int | None = None
    start_index: int | None = None
    end_index: int | None = None
    depth: int = 0
    error: str | None = None
    revert_reason: str | None = None
    function_name: str | None = None
    contract_name: str | None = None
    children: list[CallNode] = Field(default_factory=list, alias="calls")
    logs: list[LogEvent] = Field(default_factory=list)
    storages: list[StorageOp] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def _upper_kind(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def failed(self) -> bool:
        return bool(self.error)

    @property
    def is_internal(self) -> bool:
        return "JUMP" in self.kind


CallNode.model_rebuild()
