"""
Broadcast Channel

Process-wide, in-memory fan-out of content events to connected realtime
sessions:
- Every successful create/delete on a content store publishes one event
- Each session owns a bounded outbound queue drained by its own sender task,
  so publishing never waits on a client
- Delivery is best-effort: no acknowledgment, no retry, no replay for
  sessions that connect later

Clients recover from missed events by refetching full lists.
"""

import asyncio
import uuid
from typing import Any, Dict, Iterable, List, Optional, Set
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from fastapi.requests import HTTPConnection

from campus_portal.core.config import settings
from campus_portal.core.logging_config import logger


class PortalEvent(str, Enum):
    """Content events published after a committed mutation"""
    SECTION_ADDED = "section-added"
    SECTION_DELETED = "section-deleted"
    FILE_UPLOADED = "file-uploaded"
    FILE_DELETED = "file-deleted"
    NEWS_PUBLISHED = "news-published"
    NEWS_DELETED = "news-deleted"
    KNOWLEDGE_ADDED = "knowledge-added"
    KNOWLEDGE_DELETED = "knowledge-deleted"


ALL_EVENTS: Set[str] = {event.value for event in PortalEvent}


def build_message(message_type: str, data: Any = None) -> Dict[str, Any]:
    """Wire frame sent to clients"""
    return {
        "type": message_type,
        "data": data,
        "timestamp": datetime.utcnow().isoformat(),
    }


@dataclass
class ClientSession:
    """One connected realtime client"""
    websocket: Any  # anything with async send_json/close (fastapi WebSocket in production)
    user_id: str
    role: str
    queue: asyncio.Queue
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    subscriptions: Set[str] = field(default_factory=lambda: set(ALL_EVENTS))
    connected_at: datetime = field(default_factory=datetime.utcnow)
    sender: Optional[asyncio.Task] = None

    def is_subscribed(self, event: str) -> bool:
        return event in self.subscriptions


class BroadcastChannel:
    """
    Owns the set of connected sessions and fans events out to them.

    All methods run on the event loop thread; the session registry is never
    mutated across an ``await``, so no lock is needed.
    """

    def __init__(self, queue_size: Optional[int] = None):
        self.queue_size = queue_size or settings.BROADCAST_QUEUE_SIZE
        # session_id -> ClientSession
        self._sessions: Dict[str, ClientSession] = {}
        # close tasks for dropped sessions, held until they finish
        self._closing: Set[asyncio.Task] = set()

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    async def connect(
        self,
        websocket: Any,
        user_id: str,
        role: str,
        events: Optional[Iterable[str]] = None,
    ) -> ClientSession:
        """
        Accept the socket, register a session and start its sender task.

        The session is subscribed to every event unless ``events`` narrows it.
        A ``connected`` frame is queued first, ahead of any content event.
        """
        await websocket.accept()

        session = ClientSession(
            websocket=websocket,
            user_id=user_id,
            role=role,
            queue=asyncio.Queue(maxsize=self.queue_size),
        )
        if events is not None:
            session.subscriptions = {e for e in events if e in ALL_EVENTS}

        self._sessions[session.session_id] = session
        session.sender = asyncio.create_task(self._drain(session))

        self.send(session, build_message("connected", {
            "sessionId": session.session_id,
            "events": sorted(session.subscriptions),
        }))

        logger.info(
            f"[Broadcast] Session {session.session_id} connected (user {user_id}, role {role}); "
            f"{self.session_count} active"
        )
        return session

    def disconnect(self, session_id: str) -> None:
        """Forget a session and stop its sender. Unknown ids are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return

        if session.sender is not None and session.sender is not asyncio.current_task():
            session.sender.cancel()

        logger.info(
            f"[Broadcast] Session {session_id} disconnected; {self.session_count} active"
        )

    def send(self, session: ClientSession, message: Dict[str, Any]) -> bool:
        """Queue a frame for one session; drops the session if its queue is full"""
        try:
            session.queue.put_nowait(message)
            return True
        except asyncio.QueueFull:
            logger.warning(
                f"[Broadcast] Session {session.session_id} fell {self.queue_size} frames behind, dropping it"
            )
            self.disconnect(session.session_id)
            task = asyncio.create_task(self._close_quietly(session))
            self._closing.add(task)
            task.add_done_callback(self._closing.discard)
            return False

    def publish(self, event: PortalEvent, payload: Any) -> int:
        """
        Queue ``payload`` for every session subscribed to ``event``.

        Returns the number of sessions the event was queued for. Never blocks.
        """
        name = event.value
        message = build_message(name, payload)

        recipients = 0
        for session in list(self._sessions.values()):
            if session.is_subscribed(name) and self.send(session, message):
                recipients += 1

        logger.log_broadcast(name, recipients)
        return recipients

    def subscribe(self, session_id: str, events: Iterable[str]) -> List[str]:
        """Add events to a session's subscription; returns the names accepted"""
        session = self._sessions.get(session_id)
        if session is None:
            return []
        accepted = [e for e in events if e in ALL_EVENTS]
        session.subscriptions.update(accepted)
        return accepted

    def unsubscribe(self, session_id: str, events: Iterable[str]) -> List[str]:
        """Remove events from a session's subscription; returns the names removed"""
        session = self._sessions.get(session_id)
        if session is None:
            return []
        removed = [e for e in events if e in session.subscriptions]
        session.subscriptions.difference_update(removed)
        return removed

    async def close_all(self) -> None:
        """Disconnect every session (application shutdown)"""
        sessions = list(self._sessions.values())
        for session in sessions:
            self.disconnect(session.session_id)
            await self._close_quietly(session)

    async def _drain(self, session: ClientSession) -> None:
        """Sender task: deliver queued frames in order until the socket fails"""
        while True:
            message = await session.queue.get()
            try:
                await session.websocket.send_json(message)
            except Exception as e:
                logger.warning(f"[Broadcast] Send to session {session.session_id} failed: {e}")
                self.disconnect(session.session_id)
                await self._close_quietly(session)
                return

    async def _close_quietly(self, session: ClientSession) -> None:
        try:
            await session.websocket.close()
        except Exception as e:
            logger.debug(f"[Broadcast] Close of session {session.session_id} failed: {e}")


def get_broadcaster(connection: HTTPConnection) -> BroadcastChannel:
    """FastAPI dependency: the application's broadcast channel"""
    return connection.app.state.broadcaster
