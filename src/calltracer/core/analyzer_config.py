"""Configuration for an Analyzer instance."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models import ZERO_ADDRESS
from .walk import DEFAULT_MAX_DEPTH

TOKEN_COLORS = [
    "#f05a4d",
    "#56bce5",
    "#73ba46",
    "#ff9f05",
    "#ad56e2",
    "#e97ec2",
    "#2e71db",
]


class NativeToken(BaseModel):
    """Placeholder token standing for the chain's native coin."""

    address: str = ZERO_ADDRESS
    symbol: str = "ETH"
    decimals: int = Field(default=18, ge=0)


class AnalyzerConfig(BaseModel):
    """Validated configuration for an Analyzer. Passed via DI at construction."""

    include_storage: bool = False
    merge_factor: int = Field(default=2, ge=0)
    trim_address: bool = False
    trim_amount: bool = False
    native_token: NativeToken = Field(default_factory=NativeToken)
    default_decimals: int = Field(default=18, ge=0)
    palette: list[str] = Field(default_factory=lambda: list(TOKEN_COLORS), min_length=1)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
