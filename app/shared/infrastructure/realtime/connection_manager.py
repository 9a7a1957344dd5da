"""
WebSocket Connection Manager
Tracks live real-time subscribers and fans events out to them.
"""

import asyncio
import logging
from typing import Any, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages the set of connected WebSocket subscribers"""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self.active_connections.add(websocket)
        logger.info(f"Real-time subscriber connected ({len(self.active_connections)} active)")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self.active_connections.discard(websocket)
        logger.info(f"Real-time subscriber disconnected ({len(self.active_connections)} active)")

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def broadcast(self, event: str, payload: Any) -> int:
        """
        Send ``{"event", "data"}`` to every subscriber.

        Sockets whose send fails are dropped; a disconnected subscriber simply
        misses the event.

        Returns:
            Number of subscribers the frame was delivered to
        """
        message = {"event": event, "data": jsonable_encoder(payload)}
        async with self._lock:
            targets = list(self.active_connections)

        delivered = 0
        stale = []
        for websocket in targets:
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping real-time subscriber after failed send: {e}")
                stale.append(websocket)

        if stale:
            async with self._lock:
                for websocket in stale:
                    self.active_connections.discard(websocket)

        logger.debug(f"Broadcast {event} to {delivered} subscriber(s)")
        return delivered


# Global connection manager instance
connection_manager = ConnectionManager()
