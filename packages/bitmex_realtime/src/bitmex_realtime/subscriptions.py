"""Subscribe/unsubscribe control messages.

Wire shape: {"op": "subscribe", "args": ["trade:XBTUSD", ...], "id": 1}

A channel argument is either a bare channel name (every instrument the
server streams for it) or "channel:symbol".

Reference: https://www.bitmex.com/app/wsAPI#Subscriptions
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union
import json


SUBSCRIBE = "subscribe"
UNSUBSCRIBE = "unsubscribe"

Arg = Union[str, int]


@dataclass(frozen=True)
class Request:
    """Outbound control message."""

    op: str
    args: tuple[Arg, ...] = ()
    id: Optional[int] = None

    def to_message(self) -> dict:
        message: dict = {"op": self.op, "args": list(self.args)}
        if self.id is not None:
            message["id"] = self.id
        return message

    def to_json(self) -> str:
        return json.dumps(self.to_message(), separators=(",", ":"))


def channel_args(channels: Sequence[str], symbols: Optional[Sequence[str]] = None) -> list[str]:
    """Expand channels and symbols into subscription arguments.

    Channel-major ordering: every symbol of the first channel comes before
    any symbol of the second.
    """
    if not symbols:
        return list(channels)
    return [f"{channel}:{symbol}" for channel in channels for symbol in symbols]


def build_subscribe(channels: Sequence[str], symbols: Optional[Sequence[str]] = None) -> list[Request]:
    """Build the subscribe requests for one session.

    All channel arguments go into a single request.

    Args:
        channels: Channel names, e.g. ["trade", "quote"]
        symbols: Instrument symbols, empty or None for bare channels

    Returns:
        List with one subscribe Request

    Raises:
        ValueError: If no channels are given
    """
    if not channels:
        raise ValueError("At least one channel is required to subscribe")
    return [Request(op=SUBSCRIBE, args=tuple(channel_args(channels, symbols)))]


def build_unsubscribe(requests: Sequence[Request]) -> list[Request]:
    """Mirror subscribe requests as unsubscribe requests with the same args."""
    return [replace(request, op=UNSUBSCRIBE) for request in requests]
