# /app/services/database_service.py

import logging
from contextlib import contextmanager
from typing import Dict, Generator, List, Optional, Sequence

from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.student_repository_sql import StudentRepositorySQL
from .database_helpers.group_repository_sql import GroupRepositorySQL

logger = logging.getLogger(__name__)


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Facade over the per-table repositories, bound to one SQLAlchemy
        session. Repositories only flush; `unit_of_work` owns the commit.
        """
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.student_repo = StudentRepositorySQL(db_session)
        self.group_repo = GroupRepositorySQL(db_session)
        self._depth = 0

    # --- TRANSACTION CONTROL ---
    @contextmanager
    def unit_of_work(self):
        """
        Runs a multi-step mutation as one transaction. Nested blocks join the
        outermost one; only the outermost block commits or rolls back.
        """
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self.session.commit()
        except Exception:
            if self._depth == 1:
                logger.debug("Rolling back unit of work")
                self.session.rollback()
            raise
        finally:
            self._depth -= 1

    def refresh(self, instance):
        """Reload an instance whose relationships a bulk update may have staled."""
        self.session.refresh(instance)
        return instance

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_repo.get_user_by_email(email)
    def find_user_by_email_excluding(self, email: str, exclude_id: str): return self.user_repo.find_by_email_excluding(email, exclude_id)
    def find_users_by_role(self, role: str) -> List: return self.user_repo.find_by_role(role)
    def count_users_by_role(self, role: str) -> int: return self.user_repo.count_by_role(role)
    def get_user_by_reset_token(self, token_digest: str): return self.user_repo.get_user_by_reset_token(token_digest)
    def add_user(self, record: Dict): return self.user_repo.add_user(record)
    def update_user(self, user, data: Dict): return self.user_repo.update_user(user, data)
    def delete_user(self, user) -> None: self.user_repo.delete_user(user)
    def add_to_roster(self, faculty, student) -> None: self.user_repo.add_to_roster(faculty, student)
    def remove_from_roster(self, faculty, student) -> None: self.user_repo.remove_from_roster(faculty, student)
    def replace_roster(self, faculty, students: Sequence) -> None: self.user_repo.replace_roster(faculty, students)

    # --- STUDENT METHODS (DELEGATED) ---
    def get_student_by_id(self, student_id: str, *scope): return self.student_repo.get_student_by_id(student_id, *scope)
    def get_student_by_reg_no(self, reg_no: str, exclude_id: Optional[str] = None): return self.student_repo.get_student_by_reg_no(reg_no, exclude_id)
    def list_students(self, *scope, search: Optional[str] = None, faculty_id: Optional[str] = None) -> List:
        return self.student_repo.list_students(*scope, search=search, faculty_id=faculty_id)
    def list_available_students(self, faculty_id: str) -> List: return self.student_repo.list_available(faculty_id)
    def find_students_available_for_grouping(self, student_ids: Sequence[str], faculty_id: str) -> List: return self.student_repo.find_available_for_grouping(student_ids, faculty_id)
    def find_students_owned(self, student_ids: Sequence[str], faculty_id: str) -> List: return self.student_repo.find_owned(student_ids, faculty_id)
    def find_students_by_ids(self, student_ids: Sequence[str]) -> List: return self.student_repo.find_by_ids(student_ids)
    def find_students_by_group(self, group_id: str) -> List: return self.student_repo.find_by_group(group_id)
    def get_all_students(self) -> List: return self.student_repo.all_students()
    def count_students(self, *scope) -> int: return self.student_repo.count_students(*scope)
    def count_available_students(self, faculty_id: str) -> int: return self.student_repo.count_available(faculty_id)
    def recent_students(self, *scope, limit: int = 5) -> List: return self.student_repo.recent_students(*scope, limit=limit)
    def add_student(self, record: Dict): return self.student_repo.add_student(record)
    def update_student(self, student, data: Dict): return self.student_repo.update_student(student, data)
    def delete_student(self, student) -> None: self.student_repo.delete_student(student)
    def link_students_to_group(self, student_ids: Sequence[str], group_id: str, assignment_title: str) -> int: return self.student_repo.link_to_group(student_ids, group_id, assignment_title)
    def unlink_students_from_group(self, group_id: str) -> int: return self.student_repo.unlink_group(group_id)
    def set_title_for_group_members(self, group_id: str, assignment_title: str) -> int: return self.student_repo.set_title_for_group(group_id, assignment_title)
    def unlink_students_from_faculty(self, faculty_id: str) -> int: return self.student_repo.unlink_faculty(faculty_id)

    # --- WEEKLY REPORT METHODS (DELEGATED) ---
    def get_weekly_report(self, student_id: str, week: int): return self.student_repo.get_weekly_report(student_id, week)
    def add_weekly_report(self, student, record: Dict): return self.student_repo.add_weekly_report(student, record)
    def update_weekly_report(self, report, data: Dict): return self.student_repo.update_weekly_report(report, data)
    def delete_weekly_report(self, student, report) -> None: self.student_repo.delete_weekly_report(student, report)

    # --- GROUP METHODS (DELEGATED) ---
    def get_group_by_id(self, group_id: str, *scope): return self.group_repo.get_group_by_id(group_id, *scope)
    def list_groups(self, *scope) -> List: return self.group_repo.list_groups(*scope)
    def find_groups_by_faculty(self, faculty_id: str) -> List: return self.group_repo.find_by_faculty(faculty_id)
    def get_all_groups(self) -> List: return self.group_repo.all_groups()
    def count_groups(self, *scope) -> int: return self.group_repo.count_groups(*scope)
    def recent_groups(self, *scope, limit: int = 5) -> List: return self.group_repo.recent_groups(*scope, limit=limit)
    def add_group(self, record: Dict): return self.group_repo.add_group(record)
    def update_group(self, group, data: Dict): return self.group_repo.update_group(group, data)
    def delete_group(self, group) -> None: self.group_repo.delete_group(group)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the
    request's session.
    """
    yield DatabaseService(db_session=db)
