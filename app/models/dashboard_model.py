# /app/models/dashboard_model.py

# --- Core Imports ---
from typing import List

from pydantic import BaseModel, Field

from .common import StudentSummary
from .group_model import Group
from .student_model import Student

# --- Model Definitions ---

class FacultyLoad(BaseModel):
    """How many students and groups one faculty member currently carries."""
    facultyId: str
    name: str
    students: int
    availableStudents: int
    groups: int


class AdminDashboard(BaseModel):
    """
    Defines the data contract for the admin dashboard: global counts plus the
    five most recently added students.
    """
    totalStudents: int = Field(..., description="Number of students in the system.", examples=[112])
    totalFaculty: int = Field(..., description="Number of faculty accounts.", examples=[6])
    totalGroups: int = Field(..., description="Number of groups across all faculty.", examples=[50])
    recentStudents: List[Student] = Field(default_factory=list)
    facultyLoad: List[FacultyLoad] = Field(default_factory=list)


class FacultyDashboard(BaseModel):
    """
    Defines the data contract for a faculty member's dashboard, scoped to the
    caller's own students and groups.
    """
    totalStudents: int = Field(..., examples=[24])
    totalGroups: int = Field(..., examples=[11])
    availableStudents: int = Field(..., description="Students not yet in a group.", examples=[2])
    recentStudents: List[StudentSummary] = Field(default_factory=list)
    recentGroups: List[Group] = Field(default_factory=list)
