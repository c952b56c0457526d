"""Process-scoped application state"""
import asyncio
from dataclasses import dataclass
from ratify.auth.pins import PinHasher
from ratify.auth.sessions import FailureTracker, SessionStore
from ratify.config import Settings
from ratify.db.store import JsonStore
from ratify.services.auth import AuthService
from ratify.services.ballots import BallotService
from ratify.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class AppState:
    settings: Settings
    ballots: BallotService
    auth: AuthService
    sessions: SessionStore
    failures: FailureTracker

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppState":
        hasher = PinHasher(settings.pin_hash_iterations)
        ballots = BallotService(JsonStore(settings.data_file), hasher)
        sessions = SessionStore(settings.session_ttl_seconds)
        failures = FailureTracker(settings.max_pin_failures, settings.lockout_seconds)
        auth = AuthService(ballots, hasher, sessions, failures, settings.admin_code)
        return cls(settings, ballots, auth, sessions, failures)

    def bootstrap(self):
        """Seed the roster from SEED_MEMBERS"""
        roster = self.settings.seed_roster
        if roster:
            added = self.ballots.seed_members(roster)
            logger.info("Roster bootstrap complete", seeded=added, configured=len(roster))

    def prune(self):
        sessions = self.sessions.prune()
        failures = self.failures.prune()
        if sessions or failures:
            logger.debug("Pruned auth state", sessions=sessions, failure_counters=failures)

    async def prune_forever(self):
        while True:
            await asyncio.sleep(self.settings.prune_interval_seconds)
            self.prune()
