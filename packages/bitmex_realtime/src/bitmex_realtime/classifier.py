"""Classify inbound frames by topic and decode them into Events.

BitMEX table frame format:
{
    "table": "trade",
    "action": "insert",
    "data": [
        {"timestamp": "...", "symbol": "XBTUSD", "side": "Buy", "size": 100, "price": 7024.5},
        ...
    ]
}

Frames without "table" (pong, subscribe acks, welcome and error messages)
or without "data" are not table data and are discarded.
"""

from typing import Any, Optional, Union
import json
import logging

from pydantic import TypeAdapter, ValidationError

from bitmex_realtime.errors import DecodeError
from bitmex_realtime.events import Event, EventKind, PAYLOAD_TYPES, UNDEFINED_SYMBOL
from bitmex_realtime.orderbook import decode_orderbook


logger = logging.getLogger(__name__)

# Longest prefix first, so "orderBookL2" is never taken for "orderBook",
# "tradeBin" for "trade", or "orderBook10" for "order".
TOPIC_PREFIXES: tuple[tuple[str, EventKind], ...] = tuple(
    sorted(
        ((kind.value, kind) for kind in EventKind if kind.is_data),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)

# Bare-topic suffixes recognised when the topic carries no ":symbol"
KNOWN_SYMBOLS: tuple[str, ...] = ("XBTUSD", "ETHUSD", "XRPUSD")


def classify(topic: str) -> EventKind:
    """Map a topic name to its table kind, UNDEFINED if nothing matches."""
    for prefix, kind in TOPIC_PREFIXES:
        if topic.startswith(prefix):
            return kind
    return EventKind.UNDEFINED


def symbol_from_topic(topic: str) -> str:
    """Instrument symbol carried by a topic.

    "trade:XBTUSD" -> "XBTUSD". Without a colon, a known symbol suffix is
    tried; otherwise "undefined".
    """
    _, sep, suffix = topic.partition(":")
    if sep:
        return suffix
    for symbol in KNOWN_SYMBOLS:
        if topic.endswith(symbol):
            return symbol
    return UNDEFINED_SYMBOL


class FrameDecoder:
    """Turns raw frames into Events.

    One instance per session. Holds its own JSON decoder and one pydantic
    TypeAdapter per table kind; nothing is shared between instances.
    """

    def __init__(self):
        self._json = json.JSONDecoder()
        self._adapters: dict[EventKind, TypeAdapter] = {
            kind: TypeAdapter(list[payload_type])
            for kind, payload_type in PAYLOAD_TYPES.items()
            if kind is not EventKind.ORDERBOOK
        }

    def decode(self, frame: Union[str, bytes]) -> Optional[Event]:
        """Decode one frame.

        Returns:
            Event for table frames, an UNDEFINED event for unknown topics,
            None for control frames and for rows that fail to decode
        """
        try:
            text = frame.decode() if isinstance(frame, bytes) else frame
            message = self._json.decode(text)
        except ValueError:
            # pong and other plain text frames
            return None

        if not isinstance(message, dict):
            return None

        topic = message.get("table")
        if not isinstance(topic, str):
            return None
        if "data" not in message:
            return None

        action = message.get("action")
        action = action if isinstance(action, str) else ""
        symbol = symbol_from_topic(topic)
        kind = classify(topic)

        if kind is EventKind.UNDEFINED:
            logger.debug(f"Unknown topic {topic!r}")
            return Event.undefined(text, symbol=symbol, action=action)

        try:
            rows = self.decode_data(kind, message["data"])
        except (DecodeError, ValidationError) as e:
            logger.debug(f"Dropping {kind.value} frame: {e}")
            return None

        return Event(kind=kind, symbol=symbol, action=action, data=rows)

    def decode_data(self, kind: EventKind, data: Any) -> tuple:
        """Decode the data array of a classified frame.

        Raises:
            DecodeError: If data is not an array or an order book row is malformed
            ValidationError: If a row does not fit the table's model
        """
        if not isinstance(data, list):
            raise DecodeError(f"{kind.value} data is not an array")
        if kind is EventKind.ORDERBOOK:
            return tuple(decode_orderbook(row) for row in data)
        return tuple(self._adapters[kind].validate_python(data))
