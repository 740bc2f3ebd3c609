# /app/services/user_service.py

"""
Business logic for the identity store: registration, login, password reset
and the administrator's management of faculty accounts.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.core import config, security
from app.core.exceptions import (
    AuthError,
    DuplicateKeyError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from app.db.models.user_model import ROLE_FACULTY
from app.models import user_model
from . import integrity_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

RESET_REQUEST_MESSAGE = "If an account with that email exists, a password reset link has been sent."


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# --- Authentication ---

def register_user(db: DatabaseService, user_in: user_model.UserCreate):
    """Creates a user; raises DuplicateKeyError if the email is taken."""
    email = user_in.email.lower()
    if db.get_user_by_email(email):
        raise DuplicateKeyError("email", email, message="User already exists")

    record = {
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "name": user_in.name,
        "email": email,
        "hashed_password": security.get_password_hash(user_in.password),
        "role": user_in.role,
    }
    try:
        with db.unit_of_work():
            new_user = db.add_user(record)
    except IntegrityError:
        raise DuplicateKeyError("email", email, message="User already exists")

    logger.info("Registered %s user %s", new_user.role, new_user.id)
    return new_user


def authenticate_user(db: DatabaseService, email: str, password: str):
    """Returns the user for valid credentials, otherwise None."""
    user = db.get_user_by_email(email)
    if not user or not security.verify_password(password, user.hashed_password):
        return None
    return user


def login(db: DatabaseService, email: str, password: str) -> user_model.Token:
    user = authenticate_user(db, email, password)
    if user is None:
        logger.warning("Failed login attempt for %s", email)
        raise AuthError("Invalid credentials")

    token = security.create_access_token(subject=user.id, role=user.role, email=user.email)
    return user_model.Token(token=token, user=user_model.User.model_validate(user))


def request_password_reset(db: DatabaseService, email: str) -> Optional[str]:
    """
    Issues a single-use reset token and returns it, or None when no account
    matches. Callers must answer both cases identically.
    """
    user = db.get_user_by_email(email)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return None

    token = security.generate_reset_token()
    expiry = datetime.now(timezone.utc) + timedelta(minutes=config.PASSWORD_RESET_EXPIRY_MINUTES)
    with db.unit_of_work():
        db.update_user(user, {
            "passwordResetToken": security.hash_reset_token(token),
            "passwordResetExpiry": expiry,
        })
    # Mail delivery is handled outside this service.
    logger.info("Password reset token issued for user %s (expires %s)", user.id, expiry.isoformat())
    return token


def reset_password(db: DatabaseService, token: str, new_password: str) -> None:
    user = db.get_user_by_reset_token(security.hash_reset_token(token))
    if user is None or user.passwordResetExpiry is None:
        raise ValidationError("Password reset token is invalid or has expired")
    if _as_utc(user.passwordResetExpiry) < datetime.now(timezone.utc):
        raise ValidationError("Password reset token is invalid or has expired")

    with db.unit_of_work():
        db.update_user(user, {
            "hashed_password": security.get_password_hash(new_password),
            "passwordResetToken": None,
            "passwordResetExpiry": None,
        })
    logger.info("Password reset completed for user %s", user.id)


# --- Faculty Management (admin) ---

def list_faculty(db: DatabaseService) -> List:
    return db.find_users_by_role(ROLE_FACULTY)


def get_faculty(db: DatabaseService, faculty_id: str):
    faculty = db.get_user_by_id(faculty_id)
    if faculty is None or faculty.role != ROLE_FACULTY:
        raise NotFoundError("Faculty", faculty_id)
    return faculty


def update_faculty(db: DatabaseService, faculty_id: str, faculty_update: user_model.FacultyUpdate):
    """
    Applies a partial update. The assignedStudents set is replaced only if
    every supplied id exists; otherwise nothing at all is written.
    """
    update_data = faculty_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    faculty = get_faculty(db, faculty_id)

    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()
        if db.find_user_by_email_excluding(update_data["email"], faculty.id):
            raise DuplicateKeyError("email", update_data["email"], message="Email already exists")

    students = None
    if "assignedStudents" in update_data:
        requested_ids = set(update_data.pop("assignedStudents"))
        students = db.find_students_by_ids(requested_ids)
        if len(students) != len(requested_ids):
            found = {s.id for s in students}
            raise InvalidReferenceError(
                "Invalid student IDs",
                details={"missing": sorted(requested_ids - found)},
            )

    try:
        with db.unit_of_work():
            if update_data:
                db.update_user(faculty, update_data)
            if students is not None:
                db.replace_roster(faculty, students)
    except IntegrityError:
        raise DuplicateKeyError("email", update_data.get("email"), message="Email already exists")

    logger.info("Updated faculty %s (%s)", faculty.id, ", ".join(faculty_update.model_fields_set))
    return faculty


def delete_faculty(db: DatabaseService, faculty_id: str) -> dict:
    faculty = get_faculty(db, faculty_id)
    with db.unit_of_work():
        return integrity_service.cascade_delete_faculty(db, faculty)
