"""Top-of-book snapshot decoding for the orderBook10 table.

orderBook10 rows look like:
{
    "symbol": "XBTUSD",
    "timestamp": "2019-06-10T10:11:12.345Z",
    "bids": [[7024.5, 200430], [7024.0, 1500]],
    "asks": [[7025.0, 120000], [7025.5, 300]]
}

Price levels arrive as bare [price, size] arrays, so they are decoded by
hand instead of through a pydantic model. A malformed level is skipped on
its own; it never fails the whole snapshot.
"""

from dataclasses import dataclass
from datetime import datetime, UTC
from numbers import Real
from typing import Any
import logging

from bitmex_realtime.errors import DecodeError


logger = logging.getLogger(__name__)

# Placeholder for snapshots whose timestamp is missing or unparsable
ZERO_TIME = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class Book:
    """One price level."""

    price: float
    size: float


@dataclass(frozen=True)
class OrderBook:
    """Top-of-book snapshot for one instrument."""

    symbol: str
    timestamp: datetime
    bids: tuple[Book, ...] = ()
    asks: tuple[Book, ...] = ()


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def decode_book_rows(rows: list) -> list[Book]:
    """Decode [price, size] pairs, skipping rows with the wrong arity or types."""
    books = []
    for row in rows:
        if not isinstance(row, (list, tuple)) or len(row) != 2:
            logger.debug(f"Skipping malformed book row: {row!r}")
            continue
        price, size = row
        if not (_is_number(price) and _is_number(size)):
            logger.debug(f"Skipping non-numeric book row: {row!r}")
            continue
        books.append(Book(price=float(price), size=float(size)))
    return books


def parse_timestamp(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp, falling back to ZERO_TIME."""
    if not isinstance(value, str):
        return ZERO_TIME
    try:
        ts = datetime.fromisoformat(value)
    except ValueError:
        return ZERO_TIME
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def decode_orderbook(obj: Any) -> OrderBook:
    """Decode one orderBook10 row.

    Raises:
        DecodeError: If the row is not an object or lacks bid/ask arrays
    """
    if not isinstance(obj, dict):
        raise DecodeError(f"Order book row is not an object: {obj!r}")

    sides = {}
    for side in ("bids", "asks"):
        rows = obj.get(side)
        if not isinstance(rows, list):
            raise DecodeError(f"Order book row has no {side} array")
        sides[side] = tuple(decode_book_rows(rows))

    symbol = obj.get("symbol")
    return OrderBook(
        symbol=symbol if isinstance(symbol, str) else "",
        timestamp=parse_timestamp(obj.get("timestamp")),
        bids=sides["bids"],
        asks=sides["asks"],
    )
