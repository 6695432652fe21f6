"""
Registry of live WebSocket connections and fire-and-forget broadcast.
"""
import json
import logging
from typing import Any, Dict, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


class ConnectionManager:
    """One instance per app, stored on app.state.realtime."""

    def __init__(self):
        self._active_websockets: Set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._active_websockets)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a WebSocket connection"""
        await websocket.accept()
        self._active_websockets.add(websocket)
        logger.info(f"WebSocket connected. Total: {self.connection_count}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Unregister a WebSocket connection"""
        self._active_websockets.discard(websocket)
        logger.info(f"WebSocket disconnected. Total: {self.connection_count}")

    async def broadcast(self, event: str, data: Dict[str, Any]) -> None:
        """Send {event, data} to every connected socket. No acknowledgement."""
        if not self._active_websockets:
            return

        message = json.dumps({"event": event, "data": jsonable_encoder(data)}, default=str)
        disconnected = set()

        for websocket in list(self._active_websockets):
            try:
                await websocket.send_text(message)
            except Exception as e:
                logger.warning(f"Failed to send '{event}' to WebSocket: {e}")
                disconnected.add(websocket)

        self._active_websockets -= disconnected
