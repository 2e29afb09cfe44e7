import logging
import uuid
from typing import Dict, List, Optional
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """
    Who is connected right now: user id -> at most one live WebSocket.
    Lives for the process lifetime and is never persisted.
    """

    def __init__(self):
        self._connections: Dict[str, WebSocket] = {}

    @staticmethod
    def _key(user_id) -> str:
        return str(user_id)

    def connect(self, user_id: uuid.UUID, websocket: WebSocket) -> Optional[WebSocket]:
        """Register a socket, returning the one it replaced (if any)."""
        key = self._key(user_id)
        previous = self._connections.get(key)
        self._connections[key] = websocket
        logger.info(f"User {key} connected ({len(self._connections)} online)")
        return previous

    def disconnect(self, user_id: uuid.UUID, websocket: WebSocket) -> bool:
        """Remove the socket, unless a newer one has already replaced it."""
        key = self._key(user_id)
        if self._connections.get(key) is websocket:
            del self._connections[key]
            logger.info(f"User {key} disconnected ({len(self._connections)} online)")
            return True
        return False

    def get(self, user_id: uuid.UUID) -> Optional[WebSocket]:
        return self._connections.get(self._key(user_id))

    def is_online(self, user_id: uuid.UUID) -> bool:
        return self._key(user_id) in self._connections

    def online_user_ids(self) -> List[str]:
        return list(self._connections.keys())

    def __len__(self):
        return len(self._connections)
