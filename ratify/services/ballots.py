"""Member, candidate and vote operations against the JSON store.

Every operation loads the file, refreshes tallies against the current roster,
validates, mutates and saves. Nothing is written when validation fails.
"""
from typing import Iterable, List, Optional, Tuple
from ratify.auth.pins import PinHasher
from ratify.core.ratification import apply_tally, force_status, reopen
from ratify.core.roster import Roster
from ratify.db.store import JsonStore
from ratify.errors import Conflict, NotFound, ValidationFailed
from ratify.models.candidates import (
    AdminAction,
    AdminActionType,
    Candidate,
    CandidateCreate,
    StoreData,
)
from ratify.models.members import Member
from ratify.utils.logging import get_logger

logger = get_logger(__name__)


class BallotService:
    def __init__(self, store: JsonStore, hasher: PinHasher):
        self.store = store
        self.hasher = hasher

    def _load(self) -> Tuple[StoreData, Roster]:
        data = self.store.load()
        roster = Roster.from_members(data.members)
        for candidate in data.candidates:
            unknown = roster.unknown_keys(candidate.votes)
            if unknown:
                logger.warning("Dropping votes from unknown members", candidate_id=candidate.id, members=unknown)
                for name in unknown:
                    del candidate.votes[name]
            apply_tally(candidate, roster.names)
        return data, roster

    @staticmethod
    def _find(data: StoreData, candidate_id: str) -> Candidate:
        for candidate in data.candidates:
            if candidate.id == candidate_id:
                return candidate
        raise NotFound(f"Unknown candidate: {candidate_id}")

    # Members

    def list_members(self) -> List[Member]:
        data, _ = self._load()
        return data.members

    def find_member(self, name: str) -> Optional[Member]:
        data, roster = self._load()
        canonical = roster.canonical(name)
        if canonical is None:
            return None
        return next(m for m in data.members if m.name == canonical)

    def add_member(self, name: str, pin: str) -> Member:
        data, roster = self._load()
        name = name.strip()
        if not name or len(name) > 64:
            raise ValidationFailed("Member name must be 1-64 characters")
        if name in roster:
            raise Conflict(f"Member already exists: {name}")

        member = Member(name=name, pin_hash=self.hasher.hash(pin))
        data.members.append(member)
        names = roster.names + [name]
        for candidate in data.candidates:
            apply_tally(candidate, names)
        self.store.save(data)

        logger.info("Member added", member=name, total_members=len(names))
        return member

    def seed_members(self, entries: Iterable[Tuple[str, str]]) -> int:
        """Add members that are not on the roster yet; returns how many were added"""
        data, roster = self._load()
        added = []
        for name, pin in entries:
            name = name.strip()
            if name in roster or any(Roster.key(a.name) == Roster.key(name) for a in added):
                continue
            added.append(Member(name=name, pin_hash=self.hasher.hash(pin)))

        if added:
            data.members.extend(added)
            names = [m.name for m in data.members]
            for candidate in data.candidates:
                apply_tally(candidate, names)
            self.store.save(data)
            logger.info("Seeded members", added=[m.name for m in added])
        return len(added)

    # Candidates

    def list_candidates(self) -> List[Candidate]:
        data, _ = self._load()
        return data.candidates

    def get_candidate(self, candidate_id: str) -> Candidate:
        data, _ = self._load()
        return self._find(data, candidate_id)

    def add_candidate(self, payload: CandidateCreate) -> Candidate:
        data, roster = self._load()
        candidate = Candidate(
            first_name=payload.first_name,
            last_initial=payload.last_initial,
            notes=payload.notes or "",
        )
        if any(c.identity == candidate.identity for c in data.candidates):
            raise Conflict(f"Candidate already exists: {candidate.first_name} {candidate.last_initial}.")

        apply_tally(candidate, roster.names)
        data.candidates.append(candidate)
        self.store.save(data)

        logger.info("Candidate added", candidate_id=candidate.id)
        return candidate

    def cast_vote(self, candidate_id: str, member_name: str, vote: bool) -> Candidate:
        data, roster = self._load()
        candidate = self._find(data, candidate_id)
        member = roster.require(member_name)

        candidate.votes[member] = vote
        apply_tally(candidate, roster.names)
        self.store.save(data)

        logger.info(
            "Vote recorded",
            candidate_id=candidate.id,
            member=member,
            status=candidate.status.value,
        )
        return candidate

    def apply_admin_action(self, candidate_id: str, action: AdminAction) -> Optional[Candidate]:
        """Apply reopen/delete/setStatus; returns None when the candidate was deleted"""
        data, roster = self._load()
        candidate = self._find(data, candidate_id)

        if action.action is AdminActionType.DELETE:
            data.candidates.remove(candidate)
            self.store.save(data)
            logger.info("Candidate deleted", candidate_id=candidate_id)
            return None

        if action.action is AdminActionType.REOPEN:
            reopen(candidate, roster.names)
        else:
            force_status(candidate, action.status, roster.names)
        self.store.save(data)

        logger.info(
            "Admin action applied",
            candidate_id=candidate_id,
            action=action.action.value,
            status=candidate.status.value,
        )
        return candidate

    def recompute_all(self) -> List[Candidate]:
        """Persist freshly derived tallies for every candidate"""
        data, _ = self._load()
        self.store.save(data)
        return data.candidates
