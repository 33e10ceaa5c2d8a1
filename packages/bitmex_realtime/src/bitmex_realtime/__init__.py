"""BitMEX realtime (websocket) client.

This package provides:
- A session loop: connect, authenticate, subscribe, stream, unsubscribe, close
- Topic classification and schema-driven decoding into typed Events
- Keep-alive pings and cooperative cancellation
"""

from bitmex_realtime.auth import Credential, build_auth_request, generate_signature
from bitmex_realtime.classifier import FrameDecoder, classify, symbol_from_topic
from bitmex_realtime.context import SessionContext, background, with_credential
from bitmex_realtime.errors import (
    RealtimeError,
    SessionCancelled,
    SessionFailure,
    ConnectionFailedError,
    AuthenticationError,
    SubscribeError,
    StreamReadError,
    DecodeError,
)
from bitmex_realtime.events import Event, EventKind, UNDEFINED_SYMBOL
from bitmex_realtime.orderbook import Book, OrderBook
from bitmex_realtime.session import Session, SessionState, connect
from bitmex_realtime.settings import RealtimeSettings
from bitmex_realtime.subscriptions import Request, build_subscribe, build_unsubscribe

__version__ = "0.1.0"

__all__ = [
    "Credential",
    "build_auth_request",
    "generate_signature",
    "FrameDecoder",
    "classify",
    "symbol_from_topic",
    "SessionContext",
    "background",
    "with_credential",
    "RealtimeError",
    "SessionCancelled",
    "SessionFailure",
    "ConnectionFailedError",
    "AuthenticationError",
    "SubscribeError",
    "StreamReadError",
    "DecodeError",
    "Event",
    "EventKind",
    "UNDEFINED_SYMBOL",
    "Book",
    "OrderBook",
    "Session",
    "SessionState",
    "connect",
    "RealtimeSettings",
    "Request",
    "build_subscribe",
    "build_unsubscribe",
]
