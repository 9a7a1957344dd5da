# 📄 File: app/api/v1/realtime.py
# 🧭 Purpose (Layman Explanation):
# The always-open line that screens connect to so they hear about new categories,
# items and orders the moment they happen.
# 🧪 Purpose (Technical Summary):
# WebSocket subscription endpoint backed by the shared ConnectionManager. Inbound
# {"event": "message"} frames are echoed to every subscriber; other events are ignored
# and malformed JSON is logged and skipped. A status route reports subscriber count.
# 🔗 Dependencies:
# FastAPI WebSocket, app.shared.infrastructure.realtime.connection_manager
# 🔄 Connected Modules / Calls From:
# app.main (/ws), app.api.v1.router (/realtime/status)

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.shared.core.responses import success_response
from app.shared.infrastructure.realtime.connection_manager import connection_manager

logger = logging.getLogger(__name__)

# Mounted at the application root
websocket_router = APIRouter()

# Mounted under the versioned prefix
realtime_router = APIRouter()

ECHO_EVENT = "message"


@websocket_router.websocket("/ws")
async def realtime_socket(websocket: WebSocket):
    await connection_manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed real-time frame")
                continue

            if not isinstance(frame, dict) or frame.get("event") != ECHO_EVENT:
                continue
            await connection_manager.broadcast(ECHO_EVENT, frame.get("data"))
    except WebSocketDisconnect:
        pass
    finally:
        await connection_manager.disconnect(websocket)


@realtime_router.get("/status", summary="Real-time channel status")
async def realtime_status():
    return success_response(
        "Real-time status fetched successfully",
        {"connections": connection_manager.connection_count},
    )
