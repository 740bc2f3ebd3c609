# /app/services/database_helpers/student_repository_sql.py

"""
Raw SQLAlchemy queries for the `students` and `weekly_reports` tables.

Read methods accept extra filter criteria (`*scope`) produced by the access
policy, so that a faculty caller can only ever match their own students.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from app.db.models.student_models import Student, WeeklyReport


class StudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _query(self, *scope):
        return (
            self.db.query(Student)
            .options(selectinload(Student.weeklyReports))
            .filter(*scope)
        )

    # --- Reads ---

    def get_student_by_id(self, student_id: str, *scope) -> Optional[Student]:
        return self._query(Student.id == student_id, *scope).first()

    def get_student_by_reg_no(self, reg_no: str, exclude_id: Optional[str] = None) -> Optional[Student]:
        """Global lookup: registration numbers are unique across the whole system."""
        query = self.db.query(Student).filter(Student.regNo == reg_no)
        if exclude_id is not None:
            query = query.filter(Student.id != exclude_id)
        return query.first()

    def list_students(self, *scope, search: Optional[str] = None, faculty_id: Optional[str] = None) -> List[Student]:
        query = self._query(*scope)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Student.name.ilike(pattern), Student.regNo.ilike(pattern)))
        if faculty_id:
            query = query.filter(Student.assignedFacultyId == faculty_id)
        return query.order_by(Student.created_at.desc(), Student.id.desc()).all()

    def list_available(self, faculty_id: str) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.assignedFacultyId == faculty_id, Student.groupId.is_(None))
            .order_by(Student.name)
            .all()
        )

    def find_available_for_grouping(self, student_ids: Sequence[str], faculty_id: str) -> List[Student]:
        """The match set for group formation: owned by the faculty and ungrouped."""
        return (
            self.db.query(Student)
            .filter(
                Student.id.in_(list(student_ids)),
                Student.assignedFacultyId == faculty_id,
                Student.groupId.is_(None),
            )
            .all()
        )

    def find_owned(self, student_ids: Sequence[str], faculty_id: str) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.id.in_(list(student_ids)), Student.assignedFacultyId == faculty_id)
            .all()
        )

    def find_by_ids(self, student_ids: Sequence[str]) -> List[Student]:
        return self.db.query(Student).filter(Student.id.in_(list(student_ids))).all()

    def find_by_group(self, group_id: str) -> List[Student]:
        return self.db.query(Student).filter(Student.groupId == group_id).all()

    def all_students(self) -> List[Student]:
        return self.db.query(Student).all()

    def count_students(self, *scope) -> int:
        return self.db.query(Student).filter(*scope).count()

    def count_available(self, faculty_id: str) -> int:
        return (
            self.db.query(Student)
            .filter(Student.assignedFacultyId == faculty_id, Student.groupId.is_(None))
            .count()
        )

    def recent_students(self, *scope, limit: int = 5) -> List[Student]:
        return (
            self._query(*scope)
            .order_by(Student.created_at.desc(), Student.id.desc())
            .limit(limit)
            .all()
        )

    # --- Writes ---

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self.db.flush()
        return new_student

    def update_student(self, student: Student, data: Dict) -> Student:
        for key, value in data.items():
            setattr(student, key, value)
        self.db.flush()
        return student

    def delete_student(self, student: Student) -> None:
        self.db.delete(student)
        self.db.flush()

    def link_to_group(self, student_ids: Sequence[str], group_id: str, assignment_title: str) -> int:
        """One bulk update setting groupId and assignmentTitle on every member."""
        return (
            self.db.query(Student)
            .filter(Student.id.in_(list(student_ids)))
            .update(
                {Student.groupId: group_id, Student.assignmentTitle: assignment_title},
                synchronize_session="fetch",
            )
        )

    def unlink_group(self, group_id: str) -> int:
        """Clears groupId on every student currently pointing at the group."""
        return (
            self.db.query(Student)
            .filter(Student.groupId == group_id)
            .update({Student.groupId: None}, synchronize_session="fetch")
        )

    def set_title_for_group(self, group_id: str, assignment_title: str) -> int:
        return (
            self.db.query(Student)
            .filter(Student.groupId == group_id)
            .update({Student.assignmentTitle: assignment_title}, synchronize_session="fetch")
        )

    def unlink_faculty(self, faculty_id: str) -> int:
        """Clears assignedFacultyId on every student owned by the faculty."""
        return (
            self.db.query(Student)
            .filter(Student.assignedFacultyId == faculty_id)
            .update({Student.assignedFacultyId: None}, synchronize_session="fetch")
        )

    # --- Weekly Reports ---

    def get_weekly_report(self, student_id: str, week: int) -> Optional[WeeklyReport]:
        return (
            self.db.query(WeeklyReport)
            .filter(WeeklyReport.student_id == student_id, WeeklyReport.week == week)
            .first()
        )

    def add_weekly_report(self, student: Student, record: Dict) -> WeeklyReport:
        report = WeeklyReport(**record)
        student.weeklyReports.append(report)
        self.db.flush()
        return report

    def update_weekly_report(self, report: WeeklyReport, data: Dict) -> WeeklyReport:
        for key, value in data.items():
            setattr(report, key, value)
        self.db.flush()
        return report

    def delete_weekly_report(self, student: Student, report: WeeklyReport) -> None:
        student.weeklyReports.remove(report)
        self.db.flush()
