# /app/services/access_policy.py

"""
Turns the caller's role into query-scoping filters.

Administrators see everything. A faculty member's student queries are
implicitly filtered to `assignedFacultyId = self` and group queries to
`facultyId = self`. Rows outside that scope are indistinguishable from rows
that do not exist, so other faculty's rosters are never disclosed.
"""

from dataclasses import dataclass
from typing import Tuple

from app.db.models.group_model import Group
from app.db.models.student_models import Student
from app.db.models.user_model import ROLE_ADMIN, ROLE_FACULTY


@dataclass(frozen=True)
class CallerContext:
    """The authenticated caller, passed explicitly into every service call."""
    user_id: str
    role: str
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_faculty(self) -> bool:
        return self.role == ROLE_FACULTY


def student_scope(caller: CallerContext) -> Tuple:
    if caller.is_admin:
        return ()
    if caller.is_faculty:
        return (Student.assignedFacultyId == caller.user_id,)
    # Unknown roles match nothing.
    return (Student.id.is_(None),)


def group_scope(caller: CallerContext) -> Tuple:
    if caller.is_admin:
        return ()
    if caller.is_faculty:
        return (Group.facultyId == caller.user_id,)
    return (Group.id.is_(None),)
