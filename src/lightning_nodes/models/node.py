"""Locally stored node model and the raw → local mapping."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Literal, NamedTuple

from pydantic import BaseModel, Field

from lightning_nodes.models.raw import RemoteNode

SATS_PER_BTC_EXPONENT = -8  # 1 BTC = 100,000,000 sat

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Instants outside [0001-01-01T00:00:00Z, 9999-12-31T23:59:59Z] have no calendar form
MIN_CALENDAR_SECONDS = (datetime(1, 1, 1, tzinfo=timezone.utc) - _EPOCH) // timedelta(seconds=1)
MAX_CALENDAR_SECONDS = (datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc) - _EPOCH) // timedelta(seconds=1)


class Node(BaseModel):
    """Node as persisted and served. Every field is a string, never null."""

    public_key: str = Field(..., description="Primary key")
    alias: str = Field(default="", description="Empty string when the node has no alias")
    capacity: str = Field(..., description="BTC with exactly 8 fraction digits")
    first_seen: str = Field(..., description="RFC 3339 UTC, or the raw seconds when out of range")


class FirstSeen(NamedTuple):
    """Formatted first-seen value, tagged with which branch produced it."""

    kind: Literal["rfc3339", "raw"]
    text: str


def format_capacity(sats: int) -> str:
    """Satoshis → BTC string with 8 fraction digits (exact, no float rounding)."""
    return f"{Decimal(sats).scaleb(SATS_PER_BTC_EXPONENT):.8f}"


def format_first_seen(seconds: int) -> FirstSeen:
    """
    UNIX seconds → 'YYYY-MM-DDTHH:MM:SSZ' when the instant is a valid calendar time,
    otherwise the decimal string of the input unchanged.
    """
    if MIN_CALENDAR_SECONDS <= seconds <= MAX_CALENDAR_SECONDS:
        moment = _EPOCH + timedelta(seconds=seconds)
        # isoformat zero-pads years below 1000, strftime("%Y") does not on every platform
        return FirstSeen("rfc3339", moment.replace(tzinfo=None).isoformat(timespec="seconds") + "Z")
    return FirstSeen("raw", str(seconds))


def normalize_node(raw: RemoteNode) -> Node:
    """Convert one RemoteNode to a Node. Total over valid RemoteNode values."""
    return Node(
        public_key=raw.public_key,
        alias=raw.alias or "",
        capacity=format_capacity(raw.capacity),
        first_seen=format_first_seen(raw.first_seen).text,
    )
