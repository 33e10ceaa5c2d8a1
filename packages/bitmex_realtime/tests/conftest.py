"""Test fixtures for bitmex_realtime tests."""

import json
import queue
import threading
from typing import Callable, Optional, Union

import pytest
import websocket

from bitmex_realtime.context import SessionContext
from bitmex_realtime.settings import RealtimeSettings


class FakeConnection:
    """Scripted stand-in for a websocket connection.

    ``frames`` items are returned by recv() in order. An item may be an
    exception (raised) or a callable (called, its return value is the frame).
    Once the script is exhausted recv() raises ``exhausted``.
    """

    def __init__(
        self,
        frames: Optional[list] = None,
        exhausted: Optional[Exception] = None,
        fail_send: Optional[Callable[[str], bool]] = None,
    ):
        self._frames = list(frames or [])
        self._exhausted = exhausted or websocket.WebSocketConnectionClosedException(
            "Connection is already closed."
        )
        self._fail_send = fail_send
        self._lock = threading.Lock()
        self.sent: list[str] = []
        self.recv_timeouts: list[Optional[float]] = []
        self.send_timeouts: list[Optional[float]] = []
        self.closed = False
        self.close_calls = 0

    def send(self, text: str, timeout: Optional[float] = None) -> None:
        if self._fail_send and self._fail_send(text):
            raise websocket.WebSocketConnectionClosedException("send failed")
        with self._lock:
            self.sent.append(text)
            self.send_timeouts.append(timeout)

    def recv(self, timeout: Optional[float] = None) -> Union[str, bytes]:
        self.recv_timeouts.append(timeout)
        if not self._frames:
            raise self._exhausted
        item = self._frames.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item()
        return item

    def close(self) -> None:
        self.closed = True
        self.close_calls += 1

    def sent_messages(self) -> list:
        """Sent JSON messages, skipping ping frames."""
        with self._lock:
            return [json.loads(text) for text in self.sent if text != "ping"]

    def sent_ops(self) -> list[str]:
        return [message["op"] for message in self.sent_messages()]


def frame(table: str, data, action: str = "insert") -> str:
    """Render a table frame the way the server sends it."""
    return json.dumps({"table": table, "action": action, "data": data})


@pytest.fixture
def settings():
    """Settings with a slow heartbeat so pings do not interleave with assertions."""
    return RealtimeSettings(
        endpoint="wss://example.invalid/realtime",
        read_deadline=300.0,
        ping_interval=60.0,
        ping_write_timeout=5.0,
    )


@pytest.fixture
def ctx():
    return SessionContext()


@pytest.fixture
def out():
    return queue.Queue()


@pytest.fixture
def sample_trade_data():
    """Two rows of the trade table."""
    return [
        {
            "timestamp": "2019-06-10T10:11:12.345Z",
            "symbol": "XBTUSD",
            "side": "Buy",
            "size": 100,
            "price": 7024.5,
            "tickDirection": "PlusTick",
            "trdMatchID": "c3b5b7b1-0000-0000-0000-000000000001",
            "grossValue": 1423500,
            "homeNotional": 0.014235,
            "foreignNotional": 100,
        },
        {
            "timestamp": "2019-06-10T10:11:12.400Z",
            "symbol": "XBTUSD",
            "side": "Sell",
            "size": 50,
            "price": 7024.0,
            "tickDirection": "MinusTick",
            "trdMatchID": "c3b5b7b1-0000-0000-0000-000000000002",
        },
    ]


@pytest.fixture
def sample_orderbook_data():
    """One orderBook10 row."""
    return [
        {
            "symbol": "XBTUSD",
            "timestamp": "2019-06-10T10:11:12.345Z",
            "bids": [[7024.5, 200430], [7024.0, 1500]],
            "asks": [[7025.0, 120000], [7025.5, 300]],
        }
    ]


@pytest.fixture
def sample_order_data():
    """One row of the private order table."""
    return [
        {
            "orderID": "0b3f6e3a-0000-0000-0000-000000000042",
            "clOrdID": "grid_buy_7000",
            "account": 12345,
            "symbol": "XBTUSD",
            "side": "Buy",
            "orderQty": 100,
            "price": 7000.0,
            "ordType": "Limit",
            "ordStatus": "New",
            "leavesQty": 100,
            "cumQty": 0,
            "timestamp": "2019-06-10T10:11:12.345Z",
        }
    ]


@pytest.fixture
def fake_connection():
    """FakeConnection class, for tests that script their own frames."""
    return FakeConnection


@pytest.fixture
def make_frame():
    return frame
