"""Realtime session lifecycle.

One call to ``connect()`` runs one session:

    CONNECTING -> AUTHENTICATING (credential only) -> SUBSCRIBING
        -> STREAMING -> UNSUBSCRIBING -> CLOSED

STREAMING re-arms the read deadline before every read, decodes each frame
and pushes resulting events onto the caller's queue. Any read error ends the
session; reconnecting is up to the caller (call ``connect()`` again).
Teardown always stops the heartbeat, unsubscribes (when subscribed) and
closes the socket, whatever the exit path.

Reference: https://www.bitmex.com/app/wsAPI
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, Optional, Sequence
import logging
import queue
import threading

import websocket

from bitmex_realtime.auth import build_auth_request
from bitmex_realtime.classifier import FrameDecoder
from bitmex_realtime.connection import Connection, dial as dial_websocket
from bitmex_realtime.context import SessionContext
from bitmex_realtime.errors import (
    AuthenticationError,
    ConnectionFailedError,
    SessionCancelled,
    StreamReadError,
    SubscribeError,
)
from bitmex_realtime.events import Event, EventKind
from bitmex_realtime.heartbeat import Heartbeat
from bitmex_realtime.settings import RealtimeSettings
from bitmex_realtime.subscriptions import Request, build_subscribe, build_unsubscribe


logger = logging.getLogger(__name__)

PING_FRAME = "ping"
PUT_POLL_INTERVAL = 0.5  # How often a blocked put re-checks cancellation

Dialer = Callable[[str, float], Connection]

_IO_ERRORS = (websocket.WebSocketException, OSError)
# create_connection raises ValueError for a malformed or non-ws URL
_DIAL_ERRORS = _IO_ERRORS + (ValueError,)
# Teardown waits this much longer than a ping write may block
HEARTBEAT_JOIN_MARGIN = 1.0


class SessionState(Enum):
    CONNECTING = "connecting"
    AUTHENTICATING = "authenticating"
    SUBSCRIBING = "subscribing"
    STREAMING = "streaming"
    UNSUBSCRIBING = "unsubscribing"
    CLOSED = "closed"


@dataclass
class SessionStats:
    """Counters for one session.

    Attributes:
        frames: Frames read from the socket
        events: Events pushed to the output queue
        ignored: Control frames and frames that failed to decode
        undefined: Events for unknown topics (subset of events)
    """

    frames: int = 0
    events: int = 0
    ignored: int = 0
    undefined: int = 0


class Session:
    """One connect-to-disconnect lifecycle.

    Owns the connection exclusively. The read loop runs on the calling
    thread; the heartbeat runs on its own thread. All writes go through
    ``_write`` under one lock.
    """

    def __init__(
        self,
        ctx: SessionContext,
        out: queue.Queue,
        channels: Sequence[str],
        symbols: Optional[Sequence[str]] = None,
        logger: Optional[logging.Logger] = None,
        settings: Optional[RealtimeSettings] = None,
        dial: Optional[Dialer] = None,
    ):
        self._ctx = ctx
        self._out = out
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._settings = settings or RealtimeSettings()
        self._dial = dial or dial_websocket

        # Raises ValueError on an empty channel list, before any I/O
        self._requests: list[Request] = build_subscribe(channels, symbols)
        self._decoder = FrameDecoder()

        self._conn: Optional[Connection] = None
        self._write_lock = threading.Lock()
        self._stop = threading.Event()
        self._heartbeat = Heartbeat(
            send=self.send_ping,
            stop_event=self._stop,
            interval=self._settings.ping_interval,
            cancelled=ctx.is_cancelled,
        )
        self._subscribed = False
        self._unsubscribed = False
        self.state = SessionState.CONNECTING
        self.stats = SessionStats()

    @property
    def requests(self) -> list[Request]:
        return list(self._requests)

    def run(self) -> None:
        """Run the session until cancellation or a fatal error.

        Raises:
            ConnectionFailedError: Dial failed
            AuthenticationError: Auth request could not be written
            SubscribeError: Subscribe request could not be written
            StreamReadError: Read failed or the read deadline expired
            SessionCancelled: The context was cancelled
        """
        self._set_state(SessionState.CONNECTING)
        try:
            self._conn = self._dial(self._settings.url, self._settings.connect_timeout)
        except _DIAL_ERRORS as e:
            self._set_state(SessionState.CLOSED)
            raise ConnectionFailedError(f"Cannot connect to {self._settings.url}: {e}") from e
        self._log.info(f"Connected to {self._settings.url}")

        try:
            if self._ctx.credential is not None:
                self._set_state(SessionState.AUTHENTICATING)
                self._authenticate()

            self._set_state(SessionState.SUBSCRIBING)
            self._subscribe()

            self._heartbeat.start()
            self._set_state(SessionState.STREAMING)
            self._stream()
        except SessionCancelled:
            self._log.info("Session cancelled by caller")
            raise
        except (AuthenticationError, SubscribeError, StreamReadError) as e:
            self._log.error(f"Session failed: {e}")
            raise
        finally:
            self._teardown()

    def send_ping(self) -> None:
        """Write one keep-alive frame with its own write deadline."""
        self._write(PING_FRAME, timeout=self._settings.ping_write_timeout)

    def _authenticate(self) -> None:
        request = build_auth_request(
            self._ctx.credential,
            ttl=timedelta(seconds=self._settings.auth_ttl_seconds),
        )
        try:
            self._write(request.to_json())
        except _IO_ERRORS as e:
            raise AuthenticationError(f"Failed to send auth request: {e}") from e
        self._log.info(f"Sent auth request for key {self._ctx.credential.key}")

    def _subscribe(self) -> None:
        for request in self._requests:
            try:
                self._write(request.to_json())
            except _IO_ERRORS as e:
                raise SubscribeError(f"Failed to subscribe {list(request.args)}: {e}") from e
            self._log.info(f"Subscribed: {list(request.args)}")
        self._subscribed = True

    def _unsubscribe(self) -> None:
        """Best effort: failures are logged, never raised."""
        if not self._subscribed or self._unsubscribed:
            return
        self._unsubscribed = True
        for request in build_unsubscribe(self._requests):
            try:
                self._write(request.to_json())
            except _IO_ERRORS as e:
                self._log.warning(f"Failed to unsubscribe {list(request.args)}: {e}")
        self._log.info("Unsubscribed")

    def _stream(self) -> None:
        while True:
            if self._ctx.is_cancelled():
                raise SessionCancelled("Context cancelled")

            try:
                frame = self._conn.recv(timeout=self._settings.read_deadline)
            except _IO_ERRORS as e:
                raise StreamReadError(f"Cannot receive: {e}") from e
            self.stats.frames += 1

            event = self._decoder.decode(frame)

            if self._ctx.is_cancelled():
                raise SessionCancelled("Context cancelled")

            if event is None:
                self.stats.ignored += 1
                continue
            if event.kind is EventKind.UNDEFINED:
                self.stats.undefined += 1
                self._log.debug(f"Undefined topic frame: {event.error}")
            self._emit(event)

    def _emit(self, event: Event) -> None:
        """Push an event, blocking while the queue is full.

        Nothing is dropped; a blocked put only gives up when the context is
        cancelled.
        """
        while True:
            try:
                self._out.put(event, timeout=PUT_POLL_INTERVAL)
                break
            except queue.Full:
                if self._ctx.is_cancelled():
                    raise SessionCancelled("Context cancelled while output queue was full")
        self.stats.events += 1

    def _write(self, text: str, timeout: Optional[float] = None) -> None:
        if self._conn is None:
            raise websocket.WebSocketConnectionClosedException("Connection no longer exists")
        with self._write_lock:
            self._conn.send(text, timeout=timeout)

    def _teardown(self) -> None:
        self._heartbeat.stop(timeout=self._settings.ping_write_timeout + HEARTBEAT_JOIN_MARGIN)

        if self._subscribed:
            self._set_state(SessionState.UNSUBSCRIBING)
            self._unsubscribe()

        if self._conn is not None:
            try:
                self._conn.close()
            except _IO_ERRORS as e:
                self._log.warning(f"Error closing connection: {e}")
            self._conn = None

        self._set_state(SessionState.CLOSED)
        self._log.info(
            f"Session closed: frames={self.stats.frames} events={self.stats.events} "
            f"ignored={self.stats.ignored} undefined={self.stats.undefined}"
        )

    def _set_state(self, state: SessionState) -> None:
        self.state = state
        self._log.debug(f"Session state -> {state.value}")


def connect(
    ctx: SessionContext,
    out: queue.Queue,
    channels: Sequence[str],
    symbols: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None,
    *,
    settings: Optional[RealtimeSettings] = None,
    dial: Optional[Dialer] = None,
) -> None:
    """Run one realtime session on the current thread.

    Intended as a worker thread target. Sessions are independent: calling
    this twice (e.g. public channels and private channels) opens two
    connections feeding the same queue.

    Args:
        ctx: Cancellation flag and optional credential (see with_credential)
        out: Queue receiving Event objects; puts block while it is full
        channels: Channel names to subscribe
        symbols: Symbols to scope each channel to, empty for bare channels
        logger: Logger to use instead of the module logger
        settings: Endpoint and timing, RealtimeSettings() if None
        dial: Connection factory, websocket-client if None

    Raises:
        ValueError: If channels is empty
        SessionFailure: On connection, auth, subscribe or read failure
        SessionCancelled: When ctx is cancelled

    Example:
        ctx = with_credential(key, secret)
        events = queue.Queue(maxsize=1000)
        threading.Thread(
            target=connect, args=(ctx, events, ["trade"], ["XBTUSD"]), daemon=True
        ).start()
        event = events.get()
    """
    Session(
        ctx,
        out,
        channels,
        symbols,
        logger=logger,
        settings=settings,
        dial=dial,
    ).run()
