"""FastAPI routes"""
from typing import List
from fastapi import APIRouter, Depends, status
from ratify.api.deps import current_session, get_state, require_admin
from ratify.auth.sessions import Session
from ratify.models.candidates import AdminAction, Candidate, CandidateCreate, VoteRequest
from ratify.models.members import LoginRequest, MemberCreate, MemberOut, SessionOut
from ratify.state import AppState

router = APIRouter()


@router.get("/healthz")
async def health_check(state: AppState = Depends(get_state)):
    """Health check endpoint"""
    return {
        "ok": True,
        "members": len(state.ballots.list_members()),
        "candidates": len(state.ballots.list_candidates()),
        "corsOrigin": state.settings.frontend_origin,
    }


# Auth

@router.post("/api/auth", response_model=SessionOut)
async def login(body: LoginRequest, state: AppState = Depends(get_state)):
    session = await state.auth.login(body.name, body.pin, body.code)
    return SessionOut(
        token=session.token,
        member=session.member,
        admin=session.is_admin,
        expires_at=session.expires_at_iso,
    )


@router.get("/api/auth", response_model=SessionOut, response_model_exclude_none=True)
async def whoami(session: Session = Depends(current_session)):
    return SessionOut(member=session.member, admin=session.is_admin, expires_at=session.expires_at_iso)


@router.delete("/api/auth")
async def logout(session: Session = Depends(current_session), state: AppState = Depends(get_state)):
    state.auth.logout(session.token)
    return {"ok": True}


# Members

@router.get("/api/members", response_model=List[MemberOut])
async def list_members(_: Session = Depends(current_session), state: AppState = Depends(get_state)):
    return [MemberOut(name=m.name) for m in state.ballots.list_members()]


@router.post("/api/members", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
async def add_member(body: MemberCreate, _: Session = Depends(require_admin), state: AppState = Depends(get_state)):
    member = state.ballots.add_member(body.name, body.pin)
    return MemberOut(name=member.name)


# Candidates

@router.get("/api/candidates", response_model=List[Candidate])
async def list_candidates(_: Session = Depends(current_session), state: AppState = Depends(get_state)):
    return state.ballots.list_candidates()


@router.post("/api/candidates", response_model=Candidate, status_code=status.HTTP_201_CREATED)
async def add_candidate(body: CandidateCreate, _: Session = Depends(current_session), state: AppState = Depends(get_state)):
    return state.ballots.add_candidate(body)


@router.get("/api/candidates/{candidate_id}", response_model=Candidate)
async def get_candidate(candidate_id: str, _: Session = Depends(current_session), state: AppState = Depends(get_state)):
    return state.ballots.get_candidate(candidate_id)


@router.post("/api/candidates/{candidate_id}/vote", response_model=Candidate)
async def vote(
    candidate_id: str,
    body: VoteRequest,
    session: Session = Depends(current_session),
    state: AppState = Depends(get_state),
):
    return state.ballots.cast_vote(candidate_id, session.member, body.vote)


@router.patch("/api/candidates/{candidate_id}")
async def admin_action(
    candidate_id: str,
    body: AdminAction,
    _: Session = Depends(require_admin),
    state: AppState = Depends(get_state),
):
    """Admin reopen/delete/setStatus"""
    candidate = state.ballots.apply_admin_action(candidate_id, body)
    if candidate is None:
        return {"ok": True, "id": candidate_id}
    return candidate.model_dump(mode="json", by_alias=True)
