"""Appboy SDK client — the outbound sink for feedback and form analytics.

Calls are fire-and-forget: ``submit_feedback`` and ``log_feedback_displayed``
return as soon as the payload is scheduled. Delivery failures are logged
and dropped; nothing is retried.

Usage:
    from feedback_form.services.appboy_client import get_appboy_client

    get_appboy_client().submit_feedback("a@b.com", "Crash on launch", True)
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from feedback_form.config import get_settings
from feedback_form.services.http_client import appboy_post

logger = logging.getLogger(__name__)

FEEDBACK_PATH = "/feedback"
EVENTS_PATH = "/events"
FEEDBACK_DISPLAYED_EVENT = "feedback_displayed"


class AppboyClient:
    """Schedules feedback and analytics deliveries on the running event loop.

    Outside an event loop payloads are queued until ``flush()`` is awaited.
    """

    def __init__(self) -> None:
        self._pending: list[tuple[str, dict[str, Any]]] = []
        self._tasks: set[asyncio.Task[bool]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def submit_feedback(self, email: str, message: str, is_bug: bool) -> bool:
        payload = {"reply_to": email, "message": message, "is_bug": is_bug}
        return self._enqueue(FEEDBACK_PATH, payload)

    def log_feedback_displayed(self) -> bool:
        payload = {
            "name": FEEDBACK_DISPLAYED_EVENT,
            "time": datetime.now(timezone.utc).isoformat(),
        }
        return self._enqueue(EVENTS_PATH, payload)

    async def flush(self) -> int:
        """Deliver every queued payload. Returns how many were accepted."""
        pending, self._pending = self._pending, []
        if not pending:
            return 0
        results = await asyncio.gather(
            *(self._deliver(path, payload) for path, payload in pending)
        )
        return sum(results)

    async def close(self) -> None:
        """Wait for in-flight deliveries, then flush anything still queued."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.flush()

    def _enqueue(self, path: str, payload: dict[str, Any]) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._pending.append((path, payload))
            logger.debug("No running loop, queued %s payload", path)
            return True

        task = loop.create_task(self._deliver(path, payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _deliver(self, path: str, payload: dict[str, Any]) -> bool:
        settings = get_settings()
        if not settings.appboy_endpoint:
            logger.debug("Appboy endpoint not configured, dropping %s payload", path)
            return False

        body = {
            "api_key": settings.appboy_api_key,
            "device_id": settings.device_id,
            **payload,
        }
        result = await appboy_post(path, body, context=path.lstrip("/"))
        return result is not None


# Module-level singleton (created lazily, lives for the process lifetime)
_appboy_client: AppboyClient | None = None


def get_appboy_client() -> AppboyClient:
    """Return the process-wide AppboyClient, creating it on first call."""
    global _appboy_client
    if _appboy_client is None:
        _appboy_client = AppboyClient()
    return _appboy_client
