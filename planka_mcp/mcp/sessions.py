"""Session tracking for the MCP lifecycle.

A duplex (stdio) connection is one implicit session. HTTP requests are
independent, so their session is looked up by a key derived from the request:

1. ``X-Session-Token`` header, if present
2. ``Mcp-Session-Id`` header, if present
3. ``"<client host>|<User-Agent>"`` as a fallback fingerprint

The fallback can merge two callers behind one address and agent, and can
split one caller whose User-Agent changes. Clients that care should send a
token.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SESSION_TOKEN_HEADER = "x-session-token"
MCP_SESSION_HEADER = "mcp-session-id"


@dataclass
class Session:
    """Handshake state of one session.

    ``initialized`` only ever goes from False to True.
    """

    key: str
    initialized: bool = False
    last_seen: float = field(default_factory=time.monotonic)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    async def mark_initialized(self) -> bool:
        """Flip the session to ready. Returns True only for the first call."""
        async with self._lock:
            if self.initialized:
                return False
            self.initialized = True
            return True

    def touch(self, now: float | None = None) -> None:
        self.last_seen = time.monotonic() if now is None else now


def http_session_key(headers: Mapping[str, str], client_host: str | None) -> str:
    """Derive the session key of an HTTP request.

    ``headers`` is expected to be case-insensitive (Starlette ``Headers``) or
    to use lower-case names.
    """
    token = headers.get(SESSION_TOKEN_HEADER)
    if token:
        return token
    session_id = headers.get(MCP_SESSION_HEADER)
    if session_id:
        return session_id
    user_agent = headers.get("user-agent", "")
    return f"{client_host or 'unknown'}|{user_agent}"


class SessionTracker:
    """Key -> Session map shared by all in-flight HTTP requests.

    Creation is exactly-once per key: the map is re-checked after the write
    lock is taken. When ``idle_ttl`` is positive, sessions not seen for that
    many seconds are dropped whenever a new session is created.
    """

    def __init__(self, idle_ttl: float = 0.0, clock: Callable[[], float] = time.monotonic):
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, key: str) -> Session | None:
        return self._sessions.get(key)

    async def get_or_create(self, key: str) -> Session:
        session = self._sessions.get(key)
        if session is None:
            async with self._lock:
                session = self._sessions.get(key)
                if session is None:
                    self._evict_idle_locked()
                    session = Session(key, last_seen=self._clock())
                    self._sessions[key] = session
                    logger.debug(f"Created session {key!r} ({len(self._sessions)} active)")
        session.touch(self._clock())
        return session

    async def evict_idle(self) -> int:
        """Drop idle sessions now. Returns how many were removed."""
        async with self._lock:
            return self._evict_idle_locked()

    def _evict_idle_locked(self) -> int:
        if self.idle_ttl <= 0:
            return 0
        cutoff = self._clock() - self.idle_ttl
        stale = [key for key, s in self._sessions.items() if s.last_seen < cutoff]
        for key in stale:
            del self._sessions[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} idle session(s)")
        return len(stale)
