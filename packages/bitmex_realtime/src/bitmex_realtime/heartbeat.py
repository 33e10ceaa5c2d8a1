"""Keep-alive sender for an open realtime session."""

from typing import Callable, Optional
import logging
import threading


logger = logging.getLogger(__name__)

DEFAULT_PING_INTERVAL = 5.0  # Send a ping every 5 seconds


class Heartbeat:
    """Background thread that calls ``send`` every ``interval`` seconds.

    A failed send is logged and ignored; only the read path decides whether
    a session is dead. The thread exits once ``stop_event`` is set (session
    teardown) or ``cancelled()`` returns True (context cancellation).

    Example:
        heartbeat = Heartbeat(send=session.send_ping, stop_event=stop)
        heartbeat.start()
        ...
        heartbeat.stop()
    """

    def __init__(
        self,
        send: Callable[[], None],
        stop_event: threading.Event,
        interval: float = DEFAULT_PING_INTERVAL,
        cancelled: Optional[Callable[[], bool]] = None,
        name: str = "Realtime-Heartbeat",
    ):
        self._send = send
        self._stop_event = stop_event
        self._cancelled = cancelled
        self._interval = interval
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self.sent = 0
        self.failed = 0

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Heartbeat already running")
            return
        self._thread = threading.Thread(target=self._loop, daemon=True, name=self._name)
        self._thread.start()
        logger.debug("Heartbeat started")

    def stop(self, timeout: float = 2.0) -> None:
        """Signal the loop to exit and wait for the thread."""
        self._stop_event.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)
        self._thread = None
        logger.debug("Heartbeat stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            if self._cancelled is not None and self._cancelled():
                break
            try:
                self._send()
                self.sent += 1
            except Exception as e:
                self.failed += 1
                logger.debug(f"Keep-alive write failed: {e}")
