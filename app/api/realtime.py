"""WebSocket channel: presence, typing indicators and server pushes."""
import json
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from app.api.deps import get_session_factory
from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.config.constants import EVENT_TYPING, EVENT_STOP_TYPING
from app.realtime.notifier import RealtimeNotifier
from app.services.auth_service import AuthService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


async def handle_client_event(notifier: RealtimeNotifier, user_id: uuid.UUID, frame: dict):
    """
    Relay a client frame. Only typing indicators travel client -> server; they are
    forwarded to the receiver and never stored. The sender is always the socket owner.
    """
    event = frame.get("event")
    data = frame.get("data") or {}

    if event not in (EVENT_TYPING, EVENT_STOP_TYPING):
        logger.debug(f"Ignoring unknown event {event!r} from {user_id}")
        return

    try:
        receiver_id = uuid.UUID(str(data.get("receiverId")))
    except (ValueError, AttributeError):
        logger.warning(f"Bad receiverId in {event} from {user_id}")
        return

    await notifier.notify_typing(user_id, receiver_id, typing=(event == EVENT_TYPING))


async def _set_presence(session_factory, user_id: uuid.UUID, online: bool):
    async with session_factory() as session:
        await UserService(session).set_online(user_id, online)


@router.websocket("/ws")
async def realtime_socket(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    session_factory=Depends(get_session_factory),
):
    token = token or websocket.cookies.get(settings.SESSION_COOKIE_NAME)
    async with session_factory() as session:
        try:
            user = await AuthService(session).resolve_session(token)
        except UnauthorizedError:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return
        user_id = user.id

    registry = websocket.app.state.registry
    notifier = websocket.app.state.notifier

    await websocket.accept()
    previous = registry.connect(user_id, websocket)
    if previous is not None:
        try:
            await previous.close()
        except Exception:
            logger.debug(f"Previous socket of {user_id} was already closed")

    await _set_presence(session_factory, user_id, True)
    await notifier.broadcast_online(user_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning(f"Malformed frame from {user_id}")
                continue
            if isinstance(frame, dict):
                await handle_client_event(notifier, user_id, frame)
    except WebSocketDisconnect:
        pass
    finally:
        if registry.disconnect(user_id, websocket):
            await _set_presence(session_factory, user_id, False)
