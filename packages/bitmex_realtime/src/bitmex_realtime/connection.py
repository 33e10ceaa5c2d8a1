"""Thin wrapper over a websocket-client connection.

Adds per-call deadlines: ``recv(timeout)`` re-arms the socket timeout before
every read, and ``send(text, timeout)`` waits for the socket to become
writable instead of changing the socket timeout a concurrent reader relies on.
"""

from typing import Optional, Protocol, Union
import logging
import select

import websocket


logger = logging.getLogger(__name__)


class Connection(Protocol):
    """What a session needs from its transport."""

    def send(self, text: str, timeout: Optional[float] = None) -> None: ...

    def recv(self, timeout: Optional[float] = None) -> Union[str, bytes]: ...

    def close(self) -> None: ...


class WebSocketConnection:
    """Connection backed by ``websocket.WebSocket``."""

    def __init__(self, ws: websocket.WebSocket):
        self._ws = ws

    def send(self, text: str, timeout: Optional[float] = None) -> None:
        if timeout is not None and self._ws.sock is not None:
            _, writable, _ = select.select([], [self._ws.sock], [], timeout)
            if not writable:
                raise websocket.WebSocketTimeoutException(
                    f"Write deadline of {timeout}s exceeded"
                )
        self._ws.send(text)

    def recv(self, timeout: Optional[float] = None) -> Union[str, bytes]:
        self._ws.settimeout(timeout)
        return self._ws.recv()

    def close(self) -> None:
        self._ws.close()

    @property
    def connected(self) -> bool:
        return bool(self._ws.connected)


def dial(url: str, timeout: float) -> WebSocketConnection:
    """Open a websocket connection.

    Raises:
        websocket.WebSocketException, OSError: If the handshake fails
        ValueError: If the URL is malformed or not ws:// or wss://
    """
    logger.debug(f"Dialing {url}")
    ws = websocket.create_connection(url, timeout=timeout)
    return WebSocketConnection(ws)
