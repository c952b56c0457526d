"""Candidate-related models"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, NamedTuple, Optional
from uuid import uuid4
from pydantic import Field, StrictBool, field_validator, model_validator
from ratify.models.common import BaseEntity, CandidateStatus, RequestEntity, utcnow
from ratify.models.members import Member


class Candidate(BaseEntity):
    id: str = Field(default_factory=lambda: str(uuid4()))
    first_name: str
    last_initial: str
    notes: str = ""
    votes: Dict[str, bool] = Field(default_factory=dict)
    status: CandidateStatus = CandidateStatus.PENDING
    ratified: bool = False
    total_members: int = 0
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def identity(self) -> str:
        """Case-insensitive first name + last initial, used for duplicate detection"""
        return f"{self.first_name.strip().casefold()} {self.last_initial.upper()}"


class CandidateCreate(RequestEntity):
    first_name: str = Field(..., min_length=1, max_length=64)
    last_initial: str
    notes: Optional[str] = Field(default="", max_length=2000)

    @field_validator("last_initial")
    @classmethod
    def single_letter(cls, v: str) -> str:
        # some letters uppercase to two characters ("ß" -> "SS")
        upper = v.upper()
        if len(v) != 1 or len(upper) != 1 or not upper.isalpha():
            raise ValueError("lastInitial must be a single letter")
        return upper

    @field_validator("notes")
    @classmethod
    def notes_default(cls, v: Optional[str]) -> str:
        return v or ""


class VoteRequest(RequestEntity):
    vote: StrictBool


class AdminActionType(str, Enum):
    REOPEN = "reopen"
    DELETE = "delete"
    SET_STATUS = "setStatus"


class AdminAction(RequestEntity):
    action: AdminActionType
    status: Optional[CandidateStatus] = None

    @model_validator(mode="after")
    def status_required(self):
        if self.action is AdminActionType.SET_STATUS and self.status is None:
            raise ValueError("status is required for setStatus")
        return self


class Tally(NamedTuple):
    status: CandidateStatus
    ratified: bool
    total_members: int


class StoreData(BaseEntity):
    """Contents of the JSON data file"""

    members: List[Member] = Field(default_factory=list)
    candidates: List[Candidate] = Field(default_factory=list)
