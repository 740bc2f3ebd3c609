# /app/db/models/student_models.py

"""
SQLAlchemy models for the `Student` entity and its embedded weekly reports.
"""

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base
from .user_model import faculty_students


class Student(Base):
    __tablename__ = "students"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    # Stored trimmed and upper-cased; the unique index is the final guard
    # behind the service-level duplicate check.
    regNo = Column("reg_no", String, unique=True, index=True, nullable=False)
    assignmentTitle = Column("assignment_title", String, nullable=True)
    # Link to the student's own filled copy of the report sheet.
    filledGoogleSheet = Column("filled_google_sheet", String, nullable=True)

    # Nullable only so that deleting a faculty can unlink instead of orphan.
    assignedFacultyId = Column("assigned_faculty_id", String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    # The single source of group membership: Group.students reads this column.
    groupId = Column("group_id", String, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignedFaculty = relationship("User", foreign_keys=[assignedFacultyId])
    group = relationship("Group", back_populates="students")
    rosters = relationship("User", secondary=faculty_students, back_populates="assignedStudents")
    weeklyReports = relationship(
        "WeeklyReport",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="WeeklyReport.week",
    )


class WeeklyReport(Base):
    __tablename__ = "weekly_reports"
    __table_args__ = (
        # Reports are keyed by week, not by position.
        UniqueConstraint("student_id", "week", name="uq_weekly_reports_student_week"),
    )

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    week = Column(Integer, nullable=False)
    report = Column(Text, nullable=False)
    submittedAt = Column("submitted_at", DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="weeklyReports")
