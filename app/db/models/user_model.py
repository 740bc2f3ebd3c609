# /app/db/models/user_model.py

"""
SQLAlchemy model for the `User` entity (administrators and faculty) and the
faculty roster association.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


ROLE_ADMIN = "admin"
ROLE_FACULTY = "faculty"
ROLES = (ROLE_ADMIN, ROLE_FACULTY)


# A faculty member's `assignedStudents` set. A composite primary key makes
# adding the same student twice impossible, so the roster behaves as a set.
faculty_students = Table(
    "faculty_students",
    Base.metadata,
    Column("faculty_id", String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_FACULTY, index=True)

    passwordResetToken = Column("password_reset_token", String, nullable=True, index=True)
    passwordResetExpiry = Column("password_reset_expiry", DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    assignedStudents = relationship(
        "Student",
        secondary=faculty_students,
        back_populates="rosters",
        order_by="Student.name",
    )

    @property
    def is_faculty(self) -> bool:
        return self.role == ROLE_FACULTY
