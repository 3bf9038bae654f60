# app/services/presence_service.py
"""
In-process presence rooms for the realtime socket.

Every authenticated socket joins the room named after its user id, so a
message addressed {"para": "<id>"} reaches every open session of that user.
Rooms live in this process only and are touched from the event loop thread.
"""

from collections import defaultdict

from fastapi import WebSocket, WebSocketDisconnect

from app.utils.logger import get_logger

logger = get_logger(__name__)


class PresenceHub:
    def __init__(self):
        self.rooms: dict[str, set[WebSocket]] = defaultdict(set)

    def join(self, room: str, socket: WebSocket):
        self.rooms[room].add(socket)
        logger.info(f"Socket joined room {room} ({len(self.rooms[room])} open)")

    def leave(self, room: str, socket: WebSocket):
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(socket)
        if not members:
            del self.rooms[room]
        logger.info(f"Socket left room {room}")

    def is_online(self, room: str) -> bool:
        return bool(self.rooms.get(room))

    async def forward(self, message: dict) -> int:
        """Send `message` verbatim to the room in its `para` field. Returns how many sockets got it."""
        room = message.get("para")
        if not room:
            return 0

        room = str(room)
        delivered = 0
        for socket in list(self.rooms.get(room, ())):
            try:
                await socket.send_json(message)
                delivered += 1
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                # Recipient went away; its own loop may not have noticed yet
                logger.warning(f"Dropping dead socket in room {room}: {e!r}")
                self.leave(room, socket)
        return delivered


hub = PresenceHub()
