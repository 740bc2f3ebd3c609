# /app/models/common.py

"""Shared field types and small summary shapes reused by several API models."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints

# A required string that is trimmed before the emptiness check.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserSummary(BaseModel):
    """The `name email` projection of a user, embedded in other resources."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class StudentSummary(BaseModel):
    """The `name regNo assignmentTitle` projection of a student."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    regNo: str
    assignmentTitle: Optional[str] = None


class GroupSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignmentTitle: str


class MessageResponse(BaseModel):
    message: str


class Timestamped(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    created_at: Optional[datetime] = None
