import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from inventory_console.api.websocket import manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/notifications")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint pushing notification toasts as they are posted."""
    await manager.connect(websocket)
    try:
        await websocket.send_json({
            "type": "connected",
            "message": "Connected to notifications"
        })
        logger.info("Notification socket connected")

        while True:
            # Keep connection alive and answer client pings
            await websocket.receive_text()
            await websocket.send_json({"type": "pong", "message": "connection alive"})
    except WebSocketDisconnect:
        logger.info("Notification socket disconnected")
    finally:
        manager.disconnect(websocket)
