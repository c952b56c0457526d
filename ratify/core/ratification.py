"""Candidate ratification state machine.

A candidate's status is never stored as its own truth. It is derived from the
vote map and the current roster every time either is read or changed:

- every current member voted yes      -> banned, ratified
- every current member voted, all no  -> allowed
- anything else (including no roster) -> pending

Admin overrides keep this invariant by rewriting the votes, not the status.
"""
from typing import Sequence
from ratify.errors import ValidationFailed
from ratify.models.candidates import Candidate, Tally
from ratify.models.common import CandidateStatus


def recompute(candidate: Candidate, member_names: Sequence[str]) -> Tally:
    """Derive (status, ratified, total_members) from votes and roster"""
    names = list(member_names)
    total = len(names)
    votes = candidate.votes

    all_yes = total > 0 and all(votes.get(name) is True for name in names)
    all_no = total > 0 and len(votes) == total and all(v is False for v in votes.values())

    if all_yes:
        return Tally(CandidateStatus.BANNED, True, total)
    if all_no:
        return Tally(CandidateStatus.ALLOWED, False, total)
    return Tally(CandidateStatus.PENDING, False, total)


def apply_tally(candidate: Candidate, member_names: Sequence[str]) -> Candidate:
    """Recompute and write the derived fields back onto the candidate"""
    tally = recompute(candidate, member_names)
    candidate.status = tally.status
    candidate.ratified = tally.ratified
    candidate.total_members = tally.total_members
    return candidate


def force_status(candidate: Candidate, status: CandidateStatus, member_names: Sequence[str]) -> Candidate:
    """Rewrite the votes so the candidate derives to the requested status"""
    names = list(member_names)
    if status is CandidateStatus.PENDING:
        candidate.votes = {}
    elif not names:
        raise ValidationFailed(f"Cannot set status {status.value} with no members on the roster")
    else:
        verdict = status is CandidateStatus.BANNED
        candidate.votes = {name: verdict for name in names}
    return apply_tally(candidate, names)


def reopen(candidate: Candidate, member_names: Sequence[str]) -> Candidate:
    return force_status(candidate, CandidateStatus.PENDING, member_names)
