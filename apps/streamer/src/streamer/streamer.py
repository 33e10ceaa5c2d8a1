"""Session orchestrator for the streamer.

Starts one worker thread per realtime session and drains their shared
queue on the asyncio loop.
"""

import asyncio
import logging
import queue
import signal
import threading
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Callable, Optional

from bitmex_realtime import (
    Event,
    RealtimeSettings,
    SessionCancelled,
    SessionContext,
    SessionFailure,
    background,
    connect,
    with_credential,
)

from streamer.config import StreamerConfig
from streamer.console import print_event


logger = logging.getLogger(__name__)

# How long the consumer waits on the queue before re-checking workers
POLL_INTERVAL = 0.5


@dataclass
class SessionSpec:
    """One session to run: its name, context and subscriptions."""

    name: str
    ctx: SessionContext
    channels: list[str]
    symbols: Optional[list[str]] = None


class Streamer:
    """Runs the public and private sessions described by a StreamerConfig.

    Both sessions share one cancellation flag: a signal or a failure in
    either one stops both. Constructing a Streamer with private channels
    but no credentials (config account or BITMEX_API_KEY/SECRET) raises
    ValueError.

    Example:
        streamer = Streamer(config=load_config("streamer.yaml"))
        streamer.start()
        await streamer.run_until_shutdown()
        if streamer.failures: ...
    """

    def __init__(
        self,
        config: StreamerConfig,
        settings: Optional[RealtimeSettings] = None,
        on_event: Callable[[Event], None] = print_event,
    ):
        self._config = config
        self._settings = settings or RealtimeSettings(testnet=config.testnet)
        self._on_event = on_event

        self._credentials = self.credentials()
        if config.private_channels and self._credentials is None:
            raise ValueError(
                "private_channels need credentials: add an account section "
                "or set BITMEX_API_KEY and BITMEX_API_SECRET"
            )

        self._root = background()
        self._queue: queue.Queue = queue.Queue(maxsize=config.queue_size)
        self._threads: list[threading.Thread] = []
        self._start_time: Optional[datetime] = None
        self._events_seen = 0

        self.failures: list[Exception] = []

    def credentials(self) -> Optional[tuple[str, str]]:
        """API key and secret for the private session.

        The config's account section wins; otherwise BITMEX_API_KEY and
        BITMEX_API_SECRET (via RealtimeSettings) are used.
        """
        account = self._config.account
        if account is not None:
            return account.api_key.get_secret_value(), account.api_secret.get_secret_value()
        if self._settings.has_credentials():
            return (
                self._settings.api_key.get_secret_value(),
                self._settings.api_secret.get_secret_value(),
            )
        return None

    def sessions(self) -> list[SessionSpec]:
        """Sessions implied by the config."""
        specs = []
        if self._config.public_channels:
            specs.append(
                SessionSpec(
                    name="public",
                    ctx=self._root,
                    channels=list(self._config.public_channels),
                    symbols=list(self._config.symbols),
                )
            )
        if self._config.private_channels:
            key, secret = self._credentials
            specs.append(
                SessionSpec(
                    name="private",
                    ctx=with_credential(key, secret, parent=self._root),
                    channels=list(self._config.private_channels),
                )
            )
        return specs

    def start(self) -> None:
        """Start one worker thread per session."""
        if self._threads:
            logger.warning("Streamer already running")
            return

        self._start_time = datetime.now(UTC)
        for spec in self.sessions():
            thread = threading.Thread(
                target=self._run_session,
                args=(spec,),
                name=f"Realtime-{spec.name}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
            logger.info(f"Started {spec.name} session: {spec.channels} x {spec.symbols or '-'}")

    def stop(self) -> None:
        """Cancel every session started by this streamer."""
        self._root.cancel()

    def is_running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    async def run_until_shutdown(self) -> None:
        """Print events until SIGINT/SIGTERM or until every session ends."""
        loop = asyncio.get_running_loop()

        def shutdown_handler():
            logger.info("Shutdown signal received")
            self.stop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, shutdown_handler)

        try:
            while self.is_running() or not self._queue.empty():
                event = await asyncio.to_thread(self._next_event, POLL_INTERVAL)
                if event is not None:
                    self._deliver(event)
        finally:
            for sig in (signal.SIGTERM, signal.SIGINT):
                loop.remove_signal_handler(sig)

        for thread in self._threads:
            thread.join()
        logger.info(f"Streamer stopped. Final stats: {self.get_stats()}")

    def get_stats(self) -> dict:
        uptime = 0.0
        if self._start_time:
            uptime = (datetime.now(UTC) - self._start_time).total_seconds()
        return {
            "uptime_seconds": round(uptime, 1),
            "events": self._events_seen,
            "failures": len(self.failures),
        }

    def _run_session(self, spec: SessionSpec) -> None:
        try:
            connect(
                spec.ctx,
                self._queue,
                spec.channels,
                spec.symbols,
                logging.getLogger(f"{__name__}.{spec.name}"),
                settings=self._settings,
            )
        except SessionCancelled:
            logger.info(f"{spec.name} session cancelled")
        except SessionFailure as e:
            logger.error(f"{spec.name} session failed: {e}")
            self.failures.append(e)
            self.stop()
        except Exception as e:
            logger.exception(f"{spec.name} session crashed: {e}")
            self.failures.append(e)
            self.stop()

    def _next_event(self, timeout: float) -> Optional[Event]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def _deliver(self, event: Event) -> None:
        self._events_seen += 1
        self._on_event(event)
