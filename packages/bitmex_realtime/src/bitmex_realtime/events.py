"""Events delivered to the caller.

An Event is a tagged union: ``kind`` decides which payload type ``data``
holds. Construction rejects any event whose payload disagrees with its kind,
so a consumer can dispatch on ``kind`` alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from bitmex_realtime import models
from bitmex_realtime.orderbook import OrderBook


UNDEFINED_SYMBOL = "undefined"


class EventKind(Enum):
    """Table kinds, valued by their topic prefix on the wire."""

    # Public
    ANNOUNCEMENT = "announcement"
    CHAT = "chat"
    CONNECTED = "connected"
    FUNDING = "funding"
    INSTRUMENT = "instrument"
    INSURANCE = "insurance"
    LIQUIDATION = "liquidation"
    ORDERBOOK = "orderBook"
    ORDERBOOK_L2 = "orderBookL"
    NOTIFICATIONS = "publicNotifications"
    QUOTE = "quote"
    SETTLEMENT = "settlement"
    TRADE = "trade"
    TRADE_BIN = "tradeBin"

    # Private
    AFFILIATE = "affiliate"
    EXECUTION = "execution"
    ORDER = "order"
    MARGIN = "margin"
    POSITION = "position"
    PRIVATE_NOTIFICATIONS = "privateNotifications"
    TRANSACT = "transact"
    WALLET = "wallet"

    # Catch-alls
    UNDEFINED = "undefined"
    ERROR = "error"

    @property
    def is_data(self) -> bool:
        return self not in (EventKind.UNDEFINED, EventKind.ERROR)


PAYLOAD_TYPES: dict[EventKind, type] = {
    EventKind.ANNOUNCEMENT: models.Announcement,
    EventKind.CHAT: models.Chat,
    EventKind.CONNECTED: models.ConnectedUsers,
    EventKind.FUNDING: models.Funding,
    EventKind.INSTRUMENT: models.Instrument,
    EventKind.INSURANCE: models.Insurance,
    EventKind.LIQUIDATION: models.Liquidation,
    EventKind.ORDERBOOK: OrderBook,
    EventKind.ORDERBOOK_L2: models.OrderBookL2,
    EventKind.NOTIFICATIONS: models.Notification,
    EventKind.QUOTE: models.Quote,
    EventKind.SETTLEMENT: models.Settlement,
    EventKind.TRADE: models.Trade,
    EventKind.TRADE_BIN: models.TradeBin,
    EventKind.AFFILIATE: models.Affiliate,
    EventKind.EXECUTION: models.Execution,
    EventKind.ORDER: models.Order,
    EventKind.MARGIN: models.Margin,
    EventKind.POSITION: models.Position,
    EventKind.PRIVATE_NOTIFICATIONS: models.Notification,
    EventKind.TRANSACT: models.Transaction,
    EventKind.WALLET: models.Wallet,
}


@dataclass(frozen=True)
class Event:
    """One decoded frame.

    Attributes:
        kind: Which table the frame came from
        symbol: Instrument from the topic suffix, "undefined" if none
        action: "partial", "insert", "update" or "delete"
        data: Rows of PAYLOAD_TYPES[kind]; empty for undefined/error events
        error: Raw frame text (undefined) or message (error); None otherwise
    """

    kind: EventKind
    symbol: str = UNDEFINED_SYMBOL
    action: str = ""
    data: tuple[Any, ...] = ()
    error: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.data, tuple):
            object.__setattr__(self, "data", tuple(self.data))

        if not self.kind.is_data:
            if self.data:
                raise ValueError(f"{self.kind.value} event cannot carry data")
            if self.error is None:
                raise ValueError(f"{self.kind.value} event requires error text")
            return

        if self.error is not None:
            raise ValueError(f"{self.kind.value} event cannot carry error text")
        payload_type = PAYLOAD_TYPES[self.kind]
        for row in self.data:
            if not isinstance(row, payload_type):
                raise ValueError(
                    f"{self.kind.value} event expects {payload_type.__name__} rows, "
                    f"got {type(row).__name__}"
                )

    @classmethod
    def undefined(cls, raw: str, symbol: str = UNDEFINED_SYMBOL, action: str = "") -> "Event":
        """Event for a frame whose topic matched no known table."""
        return cls(kind=EventKind.UNDEFINED, symbol=symbol, action=action, error=raw)
