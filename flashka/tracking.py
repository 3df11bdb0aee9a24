"""
Tracking - Outbound play/win notifications.

The kiosk tells a tracking endpoint when a game starts and when a game
is won. Calls are fire-and-forget: no retries, response body ignored,
and a failure is only ever logged. Tracking never blocks or changes a
game.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any
import logging
import threading

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS = {
    "play": "/api/track/play",
    "win": "/api/track/win",
}


class NotificationSink(ABC):
    """Receives game events worth tracking."""

    @abstractmethod
    def notify(self, event: str, payload: dict[str, Any] | None = None) -> None:
        """Send one event. Must not raise for delivery failures."""
        pass

    def close(self, timeout: float | None = None) -> None:
        """Wait for in-flight deliveries. Nothing to wait for by default."""
        pass


class NullSink(NotificationSink):
    """Tracking disabled."""

    def notify(self, event: str, payload: dict[str, Any] | None = None) -> None:
        logger.debug("Tracking disabled, dropping %s", event)


class HttpNotificationSink(NotificationSink):
    """
    POSTs events as JSON to fixed endpoints.

    Usage:
        sink = HttpNotificationSink("https://kiosk.example.com")
        sink.notify("win", {"attempts": 9})

    With background=True (the default) each call runs on a daemon
    thread so the game never waits on the network.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 3.0,
        endpoints: dict[str, str] | None = None,
        session: requests.Session | None = None,
        background: bool = True,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.endpoints = endpoints or DEFAULT_ENDPOINTS
        self.session = session or requests.Session()
        self.background = background
        self._threads: list[threading.Thread] = []
        self._threads_lock = threading.Lock()

    def url_for(self, event: str) -> str | None:
        path = self.endpoints.get(event)
        if path is None:
            return None
        return f"{self.base_url}{path}"

    def notify(self, event: str, payload: dict[str, Any] | None = None) -> None:
        url = self.url_for(event)
        if url is None:
            logger.warning("No tracking endpoint for event %s", event)
            return

        if self.background:
            thread = threading.Thread(
                target=self._post,
                args=(event, url, payload or {}),
                name=f"flashka-track-{event}",
                daemon=True,
            )
            with self._threads_lock:
                self._threads = [t for t in self._threads if t.is_alive()]
                self._threads.append(thread)
            thread.start()
        else:
            self._post(event, url, payload or {})

    def close(self, timeout: float | None = None) -> None:
        """
        Wait for background posts still in flight.

        Daemon threads die with the interpreter, so a short-lived process
        must call this before exiting or its last notification is lost.
        timeout bounds the wait for each thread.
        """
        with self._threads_lock:
            pending, self._threads = self._threads, []
        for thread in pending:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Tracking call %s still pending at shutdown", thread.name)

    def _post(self, event: str, url: str, payload: dict[str, Any]):
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            logger.info("Tracked %s (%s)", event, response.status_code)
        except requests.RequestException as e:
            logger.warning("Tracking %s to %s failed: %s", event, url, e)
