# /app/services/dashboard_service.py

# --- Core Imports ---
import logging
from typing import Dict, List

import pandas as pd

from app.db.models.user_model import ROLE_FACULTY
from ..models.common import StudentSummary
from ..models.dashboard_model import AdminDashboard, FacultyDashboard, FacultyLoad
from ..models.group_model import Group
from ..models.student_model import Student
from .access_policy import CallerContext, group_scope, student_scope
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _faculty_load(db: DatabaseService) -> List[Dict]:
    """
    Per-faculty student and group counts, aggregated with pandas the same
    way the class roster summaries count students per class.
    """
    faculty = db.find_users_by_role(ROLE_FACULTY)
    if not faculty:
        return []

    students_df = pd.DataFrame(
        [{"facultyId": s.assignedFacultyId, "grouped": s.groupId is not None} for s in db.get_all_students()],
        columns=["facultyId", "grouped"],
    )
    groups_df = pd.DataFrame(
        [{"facultyId": g.facultyId} for g in db.get_all_groups()],
        columns=["facultyId"],
    )

    student_counts = students_df.groupby("facultyId").size().to_dict() if not students_df.empty else {}
    available_counts = (
        students_df[~students_df["grouped"]].groupby("facultyId").size().to_dict()
        if not students_df.empty else {}
    )
    group_counts = groups_df.groupby("facultyId").size().to_dict() if not groups_df.empty else {}

    return [
        {
            "facultyId": f.id,
            "name": f.name,
            "students": int(student_counts.get(f.id, 0)),
            "availableStudents": int(available_counts.get(f.id, 0)),
            "groups": int(group_counts.get(f.id, 0)),
        }
        for f in faculty
    ]


def get_admin_summary(db: DatabaseService) -> AdminDashboard:
    """Global counts for the admin dashboard plus the five newest students."""
    return AdminDashboard(
        totalStudents=db.count_students(),
        totalFaculty=db.count_users_by_role(ROLE_FACULTY),
        totalGroups=db.count_groups(),
        recentStudents=[Student.model_validate(s) for s in db.recent_students(limit=5)],
        facultyLoad=[FacultyLoad(**row) for row in _faculty_load(db)],
    )


def get_faculty_summary(db: DatabaseService, caller: CallerContext) -> FacultyDashboard:
    """The caller's own counts, newest students and newest groups."""
    return FacultyDashboard(
        totalStudents=db.count_students(*student_scope(caller)),
        totalGroups=db.count_groups(*group_scope(caller)),
        availableStudents=db.count_available_students(caller.user_id),
        recentStudents=[StudentSummary.model_validate(s) for s in db.recent_students(*student_scope(caller), limit=5)],
        recentGroups=[Group.model_validate(g) for g in db.recent_groups(*group_scope(caller), limit=5)],
    )
