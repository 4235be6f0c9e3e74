"""
Realtime WebSocket Endpoint

Attaches a client session to the broadcast channel so it receives content
events (section-added, file-deleted, ...) as they are published.

Connection URL: WS /ws?token=<jwt>
"""

import json
from typing import Optional
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from campus_portal.core.exceptions import UnauthorizedError
from campus_portal.core.logging_config import logger
from campus_portal.modules.auth import Capability, principal_from_token
from campus_portal.services.broadcast import BroadcastChannel, build_message, get_broadcaster

router = APIRouter()


def _event_names(data) -> list:
    if not isinstance(data, dict):
        return []
    events = data.get("events", [])
    if isinstance(events, str):
        return [events]
    return [e for e in events if isinstance(e, str)] if isinstance(events, list) else []


@router.websocket("/ws")
async def realtime_endpoint(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    broadcaster: BroadcastChannel = Depends(get_broadcaster),
):
    """
    Message format (client → server):
    {
        "type": "ping" | "subscribe" | "unsubscribe",
        "data": {"events": ["section-added", ...]}
    }

    Server frames: {"type", "data", "timestamp"}
    - connected: {sessionId, events} right after the handshake
    - <content event>: entity (creation) or id (deletion)
    - pong, subscribed, unsubscribed, error
    """
    try:
        if not token:
            raise UnauthorizedError("No token provided")
        principal = principal_from_token(token)
    except UnauthorizedError as e:
        await websocket.close(code=4001, reason=e.message)
        return

    if not principal.can(Capability.BROWSE_CONTENT):
        await websocket.close(code=4003, reason="Not allowed to receive updates")
        return

    session = await broadcaster.connect(
        websocket,
        user_id=principal.user_id,
        role=principal.role.value,
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                broadcaster.send(session, build_message("error", {
                    "error": "invalid_json", "message": "Invalid JSON message"
                }))
                continue

            if not isinstance(message, dict):
                continue
            message_type = message.get("type", "")

            if message_type == "ping":
                broadcaster.send(session, build_message("pong"))

            elif message_type == "subscribe":
                accepted = broadcaster.subscribe(session.session_id, _event_names(message.get("data")))
                broadcaster.send(session, build_message("subscribed", {
                    "events": accepted, "subscriptions": sorted(session.subscriptions)
                }))

            elif message_type == "unsubscribe":
                removed = broadcaster.unsubscribe(session.session_id, _event_names(message.get("data")))
                broadcaster.send(session, build_message("unsubscribed", {
                    "events": removed, "subscriptions": sorted(session.subscriptions)
                }))

            else:
                logger.debug(f"Unknown realtime message type: {message_type}")

    except WebSocketDisconnect:
        logger.debug(f"Realtime session {session.session_id} closed by client")
    except Exception as e:
        logger.error(f"Realtime session {session.session_id} error: {e}", exc_info=True)
    finally:
        broadcaster.disconnect(session.session_id)
