"""
Tests for the ratification state machine
"""
import pytest

from ratify.core.ratification import apply_tally, force_status, recompute, reopen
from ratify.core.roster import Roster
from ratify.errors import NotFound, ValidationFailed
from ratify.models.candidates import Candidate, Tally
from ratify.models.common import CandidateStatus

MEMBERS = ["A", "B", "C"]


def make(votes=None):
    return Candidate(first_name="Kim", last_initial="P", votes=votes or {})


def test_unanimous_yes_bans():
    tally = recompute(make({"A": True, "B": True, "C": True}), MEMBERS)
    assert tally == Tally(CandidateStatus.BANNED, True, 3)


def test_unanimous_no_allows():
    tally = recompute(make({"A": False, "B": False, "C": False}), MEMBERS)
    assert tally == Tally(CandidateStatus.ALLOWED, False, 3)


@pytest.mark.parametrize("votes", [
    {"A": True, "B": False},
    {"A": True, "B": True},
    {"A": False, "B": False},
    {},
])
def test_partial_coverage_is_pending(votes):
    tally = recompute(make(votes), MEMBERS)
    assert tally.status is CandidateStatus.PENDING
    assert tally.ratified is False
    assert tally.total_members == 3


def test_mixed_full_coverage_is_pending():
    tally = recompute(make({"A": True, "B": False, "C": True}), MEMBERS)
    assert tally.status is CandidateStatus.PENDING


def test_empty_roster_is_always_pending():
    assert recompute(make(), []) == Tally(CandidateStatus.PENDING, False, 0)
    assert recompute(make({"A": True}), []).status is CandidateStatus.PENDING


def test_single_member_roster():
    assert recompute(make({"A": True}), ["A"]).status is CandidateStatus.BANNED
    assert recompute(make({"A": False}), ["A"]).status is CandidateStatus.ALLOWED


def test_recompute_is_idempotent():
    candidate = make({"A": True, "B": True, "C": True})
    first = apply_tally(candidate, MEMBERS)
    snapshot = first.model_dump()
    second = apply_tally(candidate, MEMBERS)
    assert second.model_dump() == snapshot
    assert recompute(candidate, MEMBERS) == recompute(candidate, MEMBERS)


def test_total_members_tracks_current_roster():
    candidate = apply_tally(make({"A": True, "B": True}), ["A", "B"])
    assert candidate.status is CandidateStatus.BANNED
    assert candidate.total_members == 2

    apply_tally(candidate, ["A", "B", "C"])
    assert candidate.status is CandidateStatus.PENDING
    assert candidate.ratified is False
    assert candidate.total_members == 3


def test_force_banned_synthesizes_yes_votes():
    candidate = force_status(make({"A": False}), CandidateStatus.BANNED, ["A", "B"])
    assert candidate.votes == {"A": True, "B": True}
    assert candidate.status is CandidateStatus.BANNED
    assert candidate.ratified is True


def test_force_allowed_synthesizes_no_votes():
    candidate = force_status(make({"A": True}), CandidateStatus.ALLOWED, MEMBERS)
    assert candidate.votes == {"A": False, "B": False, "C": False}
    assert candidate.status is CandidateStatus.ALLOWED


def test_force_pending_and_reopen_clear_votes():
    candidate = force_status(make({"A": True, "B": True, "C": True}), CandidateStatus.PENDING, MEMBERS)
    assert candidate.votes == {}
    assert candidate.status is CandidateStatus.PENDING

    candidate = reopen(make({"A": False, "B": False, "C": False}), MEMBERS)
    assert candidate.votes == {}
    assert candidate.status is CandidateStatus.PENDING


def test_force_terminal_status_needs_a_roster():
    with pytest.raises(ValidationFailed):
        force_status(make(), CandidateStatus.BANNED, [])
    assert force_status(make(), CandidateStatus.PENDING, []).status is CandidateStatus.PENDING


def test_roster_lookup_is_case_insensitive():
    roster = Roster(["Alice", "Bob"])
    assert roster.require("  alice ") == "Alice"
    assert "BOB" in roster
    assert roster.canonical("carol") is None
    with pytest.raises(NotFound):
        roster.require("carol")


def test_roster_flags_unknown_vote_keys():
    roster = Roster(["Alice", "Bob"])
    assert roster.unknown_keys({"Alice": True, "Zed": False, "bob": True}) == ["Zed", "bob"]
