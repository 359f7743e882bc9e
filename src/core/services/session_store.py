"""Thread-safe store of per-conversation pagination sessions."""

import logging
import threading
import time
from typing import Callable, Optional

from ..models.document import RankedResult
from ..models.session import PaginationSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Session map guarded by a single lock.

    Every operation is atomic; callers never touch the underlying dict.
    """

    def __init__(
        self,
        ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize store.

        Args:
            ttl_seconds: Idle time after which a session may be swept.
            clock: Monotonic time source (seconds).
        """
        self._ttl = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, PaginationSession] = {}
        self._lock = threading.Lock()

        self._sweeper: Optional[threading.Thread] = None
        self._sweeper_stop = threading.Event()
        self._sweeper_lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def has(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def replace(
        self, session_id: str, query: str, remaining: list[RankedResult]
    ) -> None:
        """Store a new remainder, discarding any previous one for this id."""
        with self._lock:
            if session_id in self._sessions:
                logger.debug(f"Session {session_id}: replacing pending results")
            self._sessions[session_id] = PaginationSession(
                session_id=session_id,
                query=query,
                remaining=list(remaining),
                touched_at=self._clock(),
            )

    def take(
        self, session_id: str, count: int
    ) -> Optional[tuple[list[RankedResult], int]]:
        """Pop up to `count` results from the front of the remainder.

        Deletes the session once it is empty.

        Returns:
            (batch, remaining count), or None if there is no session.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None

            batch = session.remaining[:count]
            session.remaining = session.remaining[count:]

            if session.remaining:
                session.touched_at = self._clock()
            else:
                del self._sessions[session_id]

            return batch, len(session.remaining)

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def get(self, session_id: str) -> Optional[PaginationSession]:
        """Snapshot of a session (for diagnostics)."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            return PaginationSession(
                session_id=session.session_id,
                query=session.query,
                remaining=list(session.remaining),
                touched_at=session.touched_at,
            )

    def sweep(self) -> int:
        """Delete sessions idle for longer than the TTL.

        Returns:
            Number of sessions removed.
        """
        with self._lock:
            now = self._clock()
            expired = [
                sid
                for sid, session in self._sessions.items()
                if now - session.touched_at > self._ttl
            ]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.info(f"Expired {len(expired)} pagination session(s)")
        return len(expired)

    def _sweep_worker(self, interval: float) -> None:
        while not self._sweeper_stop.wait(interval):
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Session sweep failed: {e}")

    def start_sweeper(self, interval: float = 60.0) -> None:
        """Start background expiry sweep."""
        with self._sweeper_lock:
            if self._sweeper is not None and self._sweeper.is_alive():
                return

            self._sweeper_stop.clear()
            self._sweeper = threading.Thread(
                target=self._sweep_worker,
                args=(interval,),
                name="SessionStore-sweeper",
                daemon=True,
            )
            self._sweeper.start()
            logger.info(f"Session sweeper started (every {interval:.0f}s)")

    def stop_sweeper(self) -> None:
        with self._sweeper_lock:
            if self._sweeper is None:
                return

            self._sweeper_stop.set()
            self._sweeper.join(timeout=5.0)
            self._sweeper = None
            logger.info("Session sweeper stopped")
