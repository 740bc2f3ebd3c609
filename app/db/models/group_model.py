# /app/db/models/group_model.py

"""
SQLAlchemy model for the two-student `Group` entity.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core import config
from ..base_class import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(String, primary_key=True, index=True)
    assignmentTitle = Column("assignment_title", String, nullable=False)
    facultyId = Column("faculty_id", String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    googleFormLink = Column("google_form_link", String, nullable=False, default=config.DEFAULT_GOOGLE_FORM_LINK)
    isActive = Column("is_active", Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    faculty = relationship("User")
    # Membership is owned by Student.groupId; never cascade deletes to students.
    students = relationship("Student", back_populates="group", order_by="Student.name")
