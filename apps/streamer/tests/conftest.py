"""Shared test fixtures for streamer tests."""

import pytest

from bitmex_realtime import Event, EventKind, RealtimeSettings
from bitmex_realtime.models import Trade

from streamer.config import StreamerConfig, AccountConfig


@pytest.fixture
def public_config():
    """Config with public channels only."""
    return StreamerConfig(
        public_channels=["trade", "quote"],
        symbols=["XBTUSD"],
        testnet=True,
        queue_size=10,
    )


@pytest.fixture
def full_config():
    """Config with public and private channels."""
    return StreamerConfig(
        public_channels=["trade"],
        private_channels=["order", "execution"],
        symbols=["XBTUSD"],
        testnet=True,
        queue_size=10,
        account=AccountConfig(
            api_key="test_key",
            api_secret="test_secret",
        ),
    )


@pytest.fixture
def settings():
    return RealtimeSettings(endpoint="wss://example.invalid/realtime")


@pytest.fixture
def trade_event():
    return Event(
        kind=EventKind.TRADE,
        symbol="XBTUSD",
        action="insert",
        data=(Trade(symbol="XBTUSD", side="Buy", size=100, price=7024.5),),
    )
