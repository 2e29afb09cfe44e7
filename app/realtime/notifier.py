import logging
import uuid
from typing import Any
from app.realtime.registry import ConnectionRegistry
from app.schemas.swipe import MatchRef
from app.schemas.message import MessageOut
from app.config.constants import (
    EVENT_NEW_MATCH,
    EVENT_NEW_MESSAGE,
    EVENT_USER_TYPING,
    EVENT_USER_ONLINE,
    MATCH_MESSAGE,
)

logger = logging.getLogger(__name__)


class RealtimeNotifier:
    """
    Fire-and-forget pushes over the live connections in the registry.
    Delivery is at-most-once: offline users are skipped and failed sends are dropped.
    """

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry

    async def send(self, user_id: uuid.UUID, event: str, data: Any) -> bool:
        websocket = self.registry.get(user_id)
        if websocket is None:
            logger.debug(f"Dropping {event} for offline user {user_id}")
            return False

        try:
            await websocket.send_json({"event": event, "data": data})
            return True
        except Exception:
            logger.exception(f"Failed to push {event} to {user_id}")
            # The socket's own receive loop unregisters it and clears presence
            try:
                await websocket.close()
            except Exception:
                logger.debug(f"Socket of {user_id} was already closed")
            return False

    async def notify_match(self, match: MatchRef):
        payload = {
            "message": MATCH_MESSAGE,
            "photoId": str(match.photo_id) if match.photo_id else None,
            "match": match.to_json(),
        }
        for user_id in (match.user1_id, match.user2_id):
            await self.send(user_id, EVENT_NEW_MATCH, payload)

    async def notify_message(self, message: MessageOut) -> bool:
        return await self.send(message.receiver_id, EVENT_NEW_MESSAGE, message.to_json())

    async def notify_typing(self, sender_id: uuid.UUID, receiver_id: uuid.UUID, typing: bool) -> bool:
        return await self.send(receiver_id, EVENT_USER_TYPING, {"userId": str(sender_id), "typing": typing})

    async def broadcast_online(self, user_id: uuid.UUID):
        for other_id in self.registry.online_user_ids():
            if other_id != str(user_id):
                await self.send(other_id, EVENT_USER_ONLINE, {"userId": str(user_id)})
