"""Common models and types"""
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CandidateStatus(str, Enum):
    PENDING = "pending"
    ALLOWED = "allowed"
    BANNED = "banned"


class BaseEntity(BaseModel):
    """camelCase on the wire and on disk, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestEntity(BaseEntity):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
