# 📄 File: app/shared/events/notifier.py

# 🧭 Purpose (Layman Explanation):
# Tells every connected screen "a category was just added" or "an order changed",
# without ever making the person who caused the change wait for it.

# 🧪 Purpose (Technical Summary):
# Event Notifier capability injected into domain services. The WebSocket implementation
# schedules the broadcast as a background task (fire-and-forget, no delivery guarantee);
# NullNotifier and RecordingNotifier satisfy tests and offline tooling.

# 🔗 Dependencies:
# - asyncio: background task scheduling
# - app.shared.infrastructure.realtime.connection_manager (subscriber registry)

# 🔄 Connected Modules / Calls From:
# Used by: every module's domain service (after commit), app.shared.core.dependencies
# (get_notifier), tests (dependency override)

import asyncio
import logging
from typing import Any, List, Optional, Protocol, Tuple

from app.shared.infrastructure.realtime.connection_manager import ConnectionManager, connection_manager

logger = logging.getLogger(__name__)


class EventNotifier(Protocol):
    """Anything that can broadcast a mutation event."""

    def broadcast(self, event: str, payload: Any) -> None:
        ...


class WebSocketNotifier:
    """
    Broadcasts events to real-time subscribers.

    ``broadcast`` returns immediately; the send runs as a task the request never
    awaits, and failures are logged instead of propagated.
    """

    def __init__(self, manager: Optional[ConnectionManager] = None):
        self.manager = manager or connection_manager
        self.background_tasks: List[asyncio.Task] = []

    def broadcast(self, event: str, payload: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, dropping event {event}")
            return

        task = loop.create_task(self._send(event, payload))
        self.background_tasks.append(task)

        # Clean up completed tasks
        self.background_tasks = [t for t in self.background_tasks if not t.done()]

    async def _send(self, event: str, payload: Any) -> None:
        try:
            await self.manager.broadcast(event, payload)
        except Exception as e:
            logger.error(f"Failed to broadcast {event}: {e}", exc_info=True)


class NullNotifier:
    """Discards every event."""

    def broadcast(self, event: str, payload: Any) -> None:
        return None


class RecordingNotifier:
    """Keeps every event in memory, in order."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def broadcast(self, event: str, payload: Any) -> None:
        self.events.append((event, payload))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


_default_notifier: Optional[WebSocketNotifier] = None


def get_default_notifier() -> WebSocketNotifier:
    global _default_notifier
    if _default_notifier is None:
        _default_notifier = WebSocketNotifier()
    return _default_notifier
