# app/routers/presence.py
"""
Realtime presence socket.

Clients connect to /socket with their token in the x-token header (or the
x-token query parameter for browsers). While at least one socket of a user
is open the user shows as online. Any JSON object with a "para" field is
relayed as-is to every socket of that user id.
"""

import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.database import get_db
from app.services import users_service
from app.services.presence_service import hub
from app.utils.logger import get_logger
from app.utils.tokens import verify_token

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/socket")
async def presence_socket(websocket: WebSocket, db: Session = Depends(get_db)):
    token = websocket.headers.get("x-token") or websocket.query_params.get("x-token")
    valid, user_id = verify_token(token)
    if not valid:
        logger.warning(f"Socket rejected: invalid token (token present: {bool(token)})")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    room = str(user_id)
    await websocket.accept()
    hub.join(room, websocket)
    await run_in_threadpool(users_service.set_online, db, user_id, True)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                logger.debug(f"Ignoring non-JSON frame from room {room}")
                continue
            if isinstance(message, dict):
                await hub.forward(message)
    except WebSocketDisconnect:
        pass
    finally:
        hub.leave(room, websocket)
        if not hub.is_online(room):
            await run_in_threadpool(users_service.set_online, db, user_id, False)
        logger.info(f"Socket closed for room {room}")
