"""Cancellation and credential carrier passed to every session."""

from dataclasses import dataclass, field
from typing import Optional
import threading

from bitmex_realtime.auth import Credential


@dataclass(frozen=True)
class SessionContext:
    """Cooperative cancellation flag plus an optional credential.

    Contexts derived with ``with_credential`` share the parent's flag, so
    cancelling either one stops every session started from them.

    Example:
        ctx = with_credential(key, secret)
        worker = threading.Thread(target=connect, args=(ctx, queue, ["order"], None))
        worker.start()
        ...
        ctx.cancel()
    """

    credential: Optional[Credential] = None
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    def cancel(self) -> None:
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout. Returns True if cancelled."""
        return self._cancelled.wait(timeout)


def background() -> SessionContext:
    """Return a fresh, uncancelled context without credentials."""
    return SessionContext()


def with_credential(key: str, secret: str, parent: Optional[SessionContext] = None) -> SessionContext:
    """Wrap a context with API credentials.

    Args:
        key: API key identifier
        secret: API secret
        parent: Context whose cancellation flag is shared (new one if None)

    Returns:
        SessionContext that authenticates the sessions started with it
    """
    if parent is None:
        parent = background()
    return SessionContext(
        credential=Credential(key=key, secret=secret),
        _cancelled=parent._cancelled,
    )
