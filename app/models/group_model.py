# /app/models/group_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from app.core import config
from .common import NonEmptyStr, StudentSummary, UserSummary, Timestamped


class GroupCreate(BaseModel):
    """Payload for forming a group out of two of the caller's available students."""
    assignmentTitle: NonEmptyStr
    students: List[NonEmptyStr] = Field(
        ...,
        min_length=config.GROUP_SIZE,
        max_length=config.GROUP_SIZE,
        description="Exactly 2 student IDs must be selected.",
    )


class GroupUpdate(BaseModel):
    """Partial group edit. Supplying `students` replaces the whole pair."""
    assignmentTitle: Optional[NonEmptyStr] = None
    students: Optional[List[NonEmptyStr]] = Field(
        default=None,
        min_length=config.GROUP_SIZE,
        max_length=config.GROUP_SIZE,
    )
    googleFormLink: Optional[NonEmptyStr] = None
    isActive: Optional[bool] = None


class Group(Timestamped):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignmentTitle: str
    facultyId: str
    googleFormLink: str
    isActive: bool
    students: List[StudentSummary] = Field(default_factory=list)
    faculty: Optional[UserSummary] = None
    updated_at: Optional[datetime] = None
