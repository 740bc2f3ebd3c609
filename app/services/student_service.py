# /app/services/student_service.py

"""
This service module is the business logic layer for the student registry.

Every function takes an explicit `CallerContext` (or is admin-only and called
from an admin route), and every read is scoped through the access policy so
that faculty callers only ever match their own students.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    DuplicateKeyError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from app.db.models.user_model import ROLE_FACULTY
from app.models import student_model
from . import integrity_service
from .access_policy import CallerContext, student_scope
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def normalize_reg_no(reg_no: str) -> str:
    """Registration numbers compare trimmed and case-insensitively."""
    return reg_no.strip().upper()


def _ensure_reg_no_free(db: DatabaseService, reg_no: str, exclude_id: Optional[str] = None) -> None:
    if db.get_student_by_reg_no(reg_no, exclude_id=exclude_id):
        raise DuplicateKeyError("regNo", reg_no, message="Registration number already exists")


# --- Faculty Operations ---

def create_student(db: DatabaseService, caller: CallerContext, student_data: student_model.StudentCreate):
    """
    Adds a student owned by the calling faculty and puts it on the faculty's
    roster. Fails with DuplicateKeyError if the regNo is already taken.
    """
    reg_no = normalize_reg_no(student_data.regNo)
    _ensure_reg_no_free(db, reg_no)

    faculty = db.get_user_by_id(caller.user_id)
    if faculty is None or faculty.role != ROLE_FACULTY:
        raise InvalidReferenceError("Invalid faculty")

    record = {
        "id": f"stu_{uuid.uuid4().hex[:12]}",
        "name": student_data.name,
        "regNo": reg_no,
        "assignedFacultyId": faculty.id,
    }
    try:
        with db.unit_of_work():
            new_student = db.add_student(record)
            db.add_to_roster(faculty, new_student)
    except IntegrityError:
        # Lost a race with a concurrent insert; the unique index decided.
        raise DuplicateKeyError("regNo", reg_no, message="Registration number already exists")

    logger.info("Faculty %s added student %s (%s)", faculty.id, new_student.id, reg_no)
    return new_student


def list_available_students(db: DatabaseService, caller: CallerContext) -> List:
    """Students of the caller that are not in any group: the pool for group formation."""
    return db.list_available_students(caller.user_id)


# --- Scoped Reads (any role) ---

def list_students(
    db: DatabaseService,
    caller: CallerContext,
    search: Optional[str] = None,
    faculty_id: Optional[str] = None,
) -> List:
    return db.list_students(*student_scope(caller), search=search, faculty_id=faculty_id)


def get_student(db: DatabaseService, caller: CallerContext, student_id: str):
    student = db.get_student_by_id(student_id, *student_scope(caller))
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


# --- Admin Operations ---

def update_student(db: DatabaseService, student_id: str, student_update: student_model.StudentUpdate):
    """
    Admin edit. A new regNo is re-checked for uniqueness excluding this
    student; a new owner must be an existing faculty user.
    """
    update_data = student_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    student = db.get_student_by_id(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)

    if "regNo" in update_data:
        update_data["regNo"] = normalize_reg_no(update_data["regNo"])
        _ensure_reg_no_free(db, update_data["regNo"], exclude_id=student.id)

    new_faculty = None
    if "assignedFaculty" in update_data:
        new_faculty = db.get_user_by_id(update_data.pop("assignedFaculty"))
        if new_faculty is None or new_faculty.role != ROLE_FACULTY:
            raise InvalidReferenceError("Invalid faculty")

    try:
        with db.unit_of_work():
            if new_faculty is not None:
                integrity_service.reassign_student(db, student, new_faculty)
            if update_data:
                db.update_student(student, update_data)
    except IntegrityError:
        raise DuplicateKeyError("regNo", update_data.get("regNo"), message="Registration number already exists")

    logger.info("Updated student %s", student.id)
    return db.refresh(student)


def delete_student(db: DatabaseService, student_id: str) -> None:
    """Deletes a student, dissolving its group first (the partner becomes available)."""
    student = db.get_student_by_id(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    with db.unit_of_work():
        integrity_service.cascade_delete_student(db, student)


def get_student_reports(db: DatabaseService, student_id: str):
    student = db.get_student_by_id(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student
