"""Request dependencies: app state and session auth"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from ratify.auth.sessions import Session
from ratify.errors import Forbidden
from ratify.state import AppState

security = HTTPBearer(auto_error=False)


def get_state(request: Request) -> AppState:
    return request.app.state.ratify


def current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    state: AppState = Depends(get_state),
) -> Session:
    token = credentials.credentials if credentials else None
    return state.auth.authenticate(token)


def require_admin(session: Session = Depends(current_session)) -> Session:
    if not session.is_admin:
        raise Forbidden("Admin code required")
    return session
