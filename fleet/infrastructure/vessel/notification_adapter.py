"""
Vessel notification adapters.

Deliver lifecycle notifications (currently: vessel created) through:
    1. HTTP webhook POST to a configurable URL
    2. The application log, when no webhook is configured

Architecture:
    VesselWriteService  ──▶  BackgroundNotificationDispatcher
                                        │  (thread pool)
                                  ┌─────┴──────────┐
                                  │ Delegate:       │
                                  │  • Webhook      │
                                  │  • Logging      │
                                  └─────────────────┘

The dispatcher returns as soon as the delivery is queued. Delivery
failures are logged and counted; they never reach the write path.

Usage:
    notifier = BackgroundNotificationDispatcher(
        WebhookNotificationAdapter("https://hooks.example.com/fleet")
    )
    notifier.notify("New vessel 1", "...")
    notifier.shutdown()
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from urllib.parse import urlparse

import httpx

from fleet.domain.vessel.ports import NotificationPort

logger = logging.getLogger(__name__)

EVENT_NAME = "vessel_created"


class WebhookNotificationAdapter(NotificationPort):
    """Posts notifications as JSON to a webhook URL.

    Args:
        url: Full URL (must be http/https).
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport, e.g. for tests.

    Raises:
        ValueError: If the URL scheme is not http or https.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            msg = f"Invalid webhook URL scheme: {parsed.scheme}"
            raise ValueError(msg)
        self._url = url
        self._timeout = timeout
        self._transport = transport

    def notify(self, subject: str, body: str) -> None:
        """POST the notification; raises httpx errors on failure."""
        payload = {
            "event": EVENT_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "subject": subject,
            "body": body,
        }

        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            resp = client.post(
                self._url,
                json=payload,
                headers={"X-Fleet-Event": EVENT_NAME},
            )
            resp.raise_for_status()

        logger.info("Notification delivered to %s: %s", self._url, subject)


class LoggingNotificationAdapter(NotificationPort):
    """Writes notifications to the application log."""

    def notify(self, subject: str, body: str) -> None:
        logger.info("Notification: %s", subject)


class BackgroundNotificationDispatcher(NotificationPort):
    """Queues notifications on a worker pool and delivers them asynchronously.

    Args:
        delegate: Adapter that performs the actual delivery.
        max_workers: Number of delivery threads.
    """

    def __init__(self, delegate: NotificationPort, max_workers: int = 1) -> None:
        self._delegate = delegate
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )
        self._lock = threading.Lock()
        self._stats = {
            "submitted": 0,
            "delivered": 0,
            "errors": 0,
        }

    @property
    def stats(self) -> dict:
        with self._lock:
            return dict(self._stats)

    def notify(self, subject: str, body: str) -> None:
        """Queue a notification and return immediately."""
        future = self._executor.submit(self._delegate.notify, subject, body)
        with self._lock:
            self._stats["submitted"] += 1
        future.add_done_callback(self._on_done)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting notifications; optionally wait for queued ones."""
        self._executor.shutdown(wait=wait)

    def _on_done(self, future: Future) -> None:
        exc = future.exception()
        with self._lock:
            if exc is None:
                self._stats["delivered"] += 1
            else:
                self._stats["errors"] += 1
        if exc is not None:
            logger.error("Notification delivery failed: %s", exc)
