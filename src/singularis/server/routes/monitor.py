"""WebSocket route for the AI monitoring channel."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from singularis.server.monitor import get_monitor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["monitor"])


@router.websocket("/ws/ai-monitor")
async def ai_monitor(websocket: WebSocket) -> None:
    """Stream monitoring events to one client until it disconnects or is dropped."""
    await websocket.accept()
    monitor = get_monitor()

    client = await monitor.connect(websocket)
    if client is None:
        await websocket.close(code=4029, reason="Too many connections")
        return

    try:
        while monitor.is_connected(client):
            raw = await websocket.receive_text()
            if not monitor.is_connected(client):
                break
            await monitor.handle_message(client, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await monitor.disconnect(client)
