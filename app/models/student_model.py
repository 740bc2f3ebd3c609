# /app/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .common import NonEmptyStr, UserSummary, GroupSummary, Timestamped
from .report_model import WeeklyReport

# --- Model Definitions ---

class StudentCreate(BaseModel):
    """
    Payload for a faculty member adding a student. The owning faculty is the
    caller, never part of the body.
    """
    name: NonEmptyStr = Field(..., description="The full name of the student.")
    regNo: NonEmptyStr = Field(..., description="The unique registration number. Stored upper-cased.")


class StudentUpdate(BaseModel):
    """
    Admin edit of a student. All fields are optional to allow for partial
    updates; a supplied field may not be blank.
    """
    name: Optional[NonEmptyStr] = Field(default=None)
    regNo: Optional[NonEmptyStr] = Field(default=None)
    assignmentTitle: Optional[NonEmptyStr] = Field(default=None)
    assignedFaculty: Optional[NonEmptyStr] = Field(default=None, description="ID of the new owning faculty.")


class AvailableStudent(BaseModel):
    """A candidate for group formation."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    regNo: str
    assignmentTitle: Optional[str] = None


class Student(Timestamped):
    """
    The full representation of a Student resource, as returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    name: str
    regNo: str
    assignmentTitle: Optional[str] = None
    assignedFacultyId: Optional[str] = Field(default=None, description="ID of the owning faculty; null after that faculty was deleted.")
    groupId: Optional[str] = Field(default=None, description="ID of the student's group; null while available.")
    filledGoogleSheet: Optional[str] = None
    assignedFaculty: Optional[UserSummary] = None
    group: Optional[GroupSummary] = None
    weeklyReports: List[WeeklyReport] = Field(default_factory=list)
    updated_at: Optional[datetime] = None


class StudentReports(BaseModel):
    """The admin's view of one student's weekly reports."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    regNo: str
    assignmentTitle: Optional[str] = None
    assignedFaculty: Optional[UserSummary] = None
    filledGoogleSheet: Optional[str] = None
    weeklyReports: List[WeeklyReport] = Field(default_factory=list)
