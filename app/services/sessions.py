"""
In-memory registry of per-operator portal controllers
"""

import asyncio
import logging
import secrets
import time
from typing import Callable, Dict, Optional, Tuple

from app.core.config import settings
from app.services.followup_controller import FollowUpController
from app.services.guest_directory import GuestDirectoryClient

logger = logging.getLogger(__name__)


class PortalSessions:
    """Maps session ids (cookie values) to follow-up controllers.

    Sessions idle for longer than ``idle_ttl`` seconds are dropped on the next
    lookup, except those with a submission still running.
    """

    def __init__(
        self,
        directory_factory: Callable[[], GuestDirectoryClient] = GuestDirectoryClient,
        success_delay: Optional[float] = None,
        idle_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.directory_factory = directory_factory
        self.success_delay = success_delay
        self.idle_ttl = settings.SESSION_IDLE_TTL_SECONDS if idle_ttl is None else idle_ttl
        self.clock = clock
        self.controllers: Dict[str, FollowUpController] = {}
        self.last_seen: Dict[str, float] = {}

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, FollowUpController]:
        """Controller for ``session_id``; unknown or missing ids get a fresh one"""
        now = self.clock()
        self.evict_idle(now)

        if session_id and session_id in self.controllers:
            self.last_seen[session_id] = now
            return session_id, self.controllers[session_id]

        session_id = secrets.token_urlsafe(16)
        controller = FollowUpController(self.directory_factory(), success_delay=self.success_delay)
        self.controllers[session_id] = controller
        self.last_seen[session_id] = now
        logger.info(f"Portal session opened. Active sessions: {len(self.controllers)}")
        return session_id, controller

    def evict_idle(self, now: Optional[float] = None) -> int:
        """Drop idle sessions that have nothing in flight; returns how many"""
        if now is None:
            now = self.clock()

        expired = [
            session_id
            for session_id, seen in self.last_seen.items()
            if now - seen > self.idle_ttl and not self.controllers[session_id].is_busy
        ]
        for session_id in expired:
            del self.controllers[session_id]
            del self.last_seen[session_id]

        if expired:
            logger.info(f"Evicted {len(expired)} idle portal sessions. Active sessions: {len(self.controllers)}")
        return len(expired)

    async def drain(self) -> None:
        """Let every controller finish its background work"""
        await asyncio.gather(*(controller.drain() for controller in list(self.controllers.values())))


# Global session registry
portal_sessions = PortalSessions()


def get_portal_sessions() -> PortalSessions:
    return portal_sessions
