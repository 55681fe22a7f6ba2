import logging
from typing import Iterable, List

from fastapi import WebSocket

from inventory_console.models.notification import Notification

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections that receive notification toasts."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """Accept a new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        """Remove a WebSocket connection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast_notification(self, notification: Notification):
        """Send one notification to every connected client."""
        message = {
            "type": "notification",
            "notification": notification.model_dump(mode="json", by_alias=True),
        }

        disconnected = []
        for connection in self.active_connections:
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning("Dropping notification socket after failed send", exc_info=True)
                disconnected.append(connection)

        # Remove disconnected connections
        for conn in disconnected:
            self.disconnect(conn)

    async def publish(self, notifications: Iterable[Notification]):
        for notification in notifications:
            await self.broadcast_notification(notification)


manager = ConnectionManager()
