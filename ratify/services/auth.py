"""PIN login with optional admin code and lockout counters"""
import hmac
from typing import Optional
from fastapi.concurrency import run_in_threadpool
from ratify.auth.pins import PinHasher
from ratify.auth.sessions import FailureTracker, Session, SessionStore
from ratify.core.roster import Roster
from ratify.errors import Unauthorized
from ratify.services.ballots import BallotService
from ratify.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        ballots: BallotService,
        hasher: PinHasher,
        sessions: SessionStore,
        failures: FailureTracker,
        admin_code: Optional[str] = None,
    ):
        self.ballots = ballots
        self.hasher = hasher
        self.sessions = sessions
        self.failures = failures
        self.admin_code = admin_code

    def _code_matches(self, code: str) -> bool:
        if not self.admin_code:
            return False
        return hmac.compare_digest(code.encode(), self.admin_code.encode())

    async def login(self, name: str, pin: str, code: Optional[str] = None) -> Session:
        """Verify credentials and open a session.

        The PBKDF2 check runs in the threadpool so the event loop keeps serving
        requests and the pruner. Counters and sessions are only touched on the
        loop thread.
        """
        key = Roster.key(name)
        self.failures.check(key)

        member = self.ballots.find_member(name)
        pin_ok = member is not None and await run_in_threadpool(self.hasher.verify, pin, member.pin_hash)
        code_ok = not code or self._code_matches(code)

        if not (pin_ok and code_ok):
            remaining = self.failures.record_failure(key)
            logger.warning("Login failed", member=name.strip(), attempts_left=remaining)
            raise Unauthorized("Invalid name, PIN or code")

        self.failures.reset(key)
        session = self.sessions.issue(member.name, is_admin=bool(code))
        logger.info("Login succeeded", member=member.name, admin=session.is_admin)
        return session

    def authenticate(self, token: Optional[str]) -> Session:
        session = self.sessions.get(token) if token else None
        if session is None:
            raise Unauthorized("Unauthorized")
        return session

    def logout(self, token: str) -> bool:
        return self.sessions.revoke(token)
