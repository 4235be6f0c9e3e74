"""Shared test helpers"""
import asyncio
from typing import Any, Dict, List

from campus_portal.core.security import create_access_token
from campus_portal.models.user import User

CONTROL_FRAMES = ('connected', 'pong', 'subscribed', 'unsubscribed', 'error')


class FakeWebSocket:
    """Stands in for a client socket attached to the broadcast channel"""

    def __init__(self, fail_sends: bool = False):
        self.accepted = False
        self.closed = False
        self.fail_sends = fail_sends
        self.sent: List[Dict[str, Any]] = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message: Dict[str, Any]):
        if self.fail_sends:
            raise RuntimeError('socket gone')
        self.sent.append(message)

    async def close(self, code: int = 1000):
        self.closed = True

    @property
    def events(self) -> List[Dict[str, Any]]:
        """Content events only"""
        return [m for m in self.sent if m['type'] not in CONTROL_FRAMES]


async def settle(rounds: int = 10):
    """Let sender tasks drain their queues"""
    for _ in range(rounds):
        await asyncio.sleep(0)


def make_token(user: User) -> str:
    return create_access_token({
        'sub': user.id,
        'university_id': user.university_id,
        'role': user.role.value,
        'full_name': user.full_name,
    })
