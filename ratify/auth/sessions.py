"""In-memory sessions and PIN failure counters.

Both live only for the life of the process and are pruned on a timer by the
application lifespan.
"""
import math
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
from ratify.errors import LockedOut


@dataclass
class Session:
    token: str
    member: str
    is_admin: bool
    created_at: float
    expires_at: float

    @property
    def expires_at_iso(self) -> str:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc).isoformat()


class SessionStore:
    """token -> Session, expiring after a fixed TTL"""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def issue(self, member: str, is_admin: bool = False) -> Session:
        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(32),
            member=member,
            is_admin=is_admin,
            created_at=now,
            expires_at=now + self.ttl_seconds,
        )
        self._sessions[session.token] = session
        return session

    def get(self, token: str) -> Optional[Session]:
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            del self._sessions[token]
            return None
        return session

    def revoke(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def prune(self) -> int:
        now = self._clock()
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        return len(expired)


@dataclass
class _FailureRecord:
    count: int = 0
    last_failure: float = 0.0
    locked_until: Optional[float] = None


class FailureTracker:
    """Consecutive PIN failures per key, locking the key after max_failures"""

    def __init__(self, max_failures: int, lockout_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.max_failures = max_failures
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._records: Dict[str, _FailureRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def check(self, key: str):
        """Raise LockedOut while the key is locked"""
        record = self._records.get(key)
        if record is None or record.locked_until is None:
            return
        remaining = record.locked_until - self._clock()
        if remaining > 0:
            raise LockedOut("Too many failed attempts, try again later", retry_after=math.ceil(remaining))
        del self._records[key]

    def record_failure(self, key: str) -> int:
        """Count a failure; returns attempts left before lockout"""
        now = self._clock()
        record = self._records.setdefault(key, _FailureRecord())
        record.count += 1
        record.last_failure = now
        if record.count >= self.max_failures:
            record.locked_until = now + self.lockout_seconds
            return 0
        return self.max_failures - record.count

    def reset(self, key: str):
        self._records.pop(key, None)

    def is_locked(self, key: str) -> bool:
        record = self._records.get(key)
        return bool(record and record.locked_until and record.locked_until > self._clock())

    def prune(self) -> int:
        """Drop expired locks and stale unlocked counters"""
        now = self._clock()
        stale = []
        for key, record in self._records.items():
            if record.locked_until is not None:
                if record.locked_until <= now:
                    stale.append(key)
            elif now - record.last_failure >= self.lockout_seconds:
                stale.append(key)
        for key in stale:
            del self._records[key]
        return len(stale)
