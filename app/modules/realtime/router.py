from fastapi import APIRouter, WebSocket, WebSocketDisconnect

router = APIRouter(tags=["Realtime"])


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket):
    """
    Canal de eventos en tiempo real (jobUpdated, invoiceUpdated, commentAdded).
    Los mensajes entrantes se ignoran salvo "ping".
    """
    manager = websocket.app.state.realtime
    await manager.connect(websocket)
    try:
        while True:
            text = await websocket.receive_text()
            if text == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
