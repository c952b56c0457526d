"""Member-related models"""
from typing import Optional
from pydantic import Field
from ratify.models.common import BaseEntity, RequestEntity


class Member(BaseEntity):
    name: str
    pin_hash: str


class MemberOut(BaseEntity):
    name: str


class MemberCreate(RequestEntity):
    name: str = Field(..., min_length=1, max_length=64)
    pin: str = Field(..., pattern=r"^[0-9]{4,12}$")


class LoginRequest(RequestEntity):
    name: str = Field(..., min_length=1, max_length=64)
    pin: str = Field(..., min_length=1, max_length=64)
    code: Optional[str] = None


class SessionOut(BaseEntity):
    token: Optional[str] = None
    member: str
    admin: bool
    expires_at: str
