# /app/services/database_helpers/user_repository_sql.py

"""
Raw SQLAlchemy queries for the `users` table and the faculty roster
association. Methods flush but never commit: the surrounding unit of work in
`DatabaseService` decides when a multi-step change becomes durable.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.user_model import User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def find_by_email_excluding(self, email: str, exclude_id: str) -> Optional[User]:
        """Used for the uniqueness check when a user changes their email."""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.lower(), User.id != exclude_id)
            .first()
        )

    def find_by_role(self, role: str) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.created_at.desc(), User.id).all()

    def count_by_role(self, role: str) -> int:
        return self.db.query(User).filter(User.role == role).count()

    def get_user_by_reset_token(self, token_digest: str) -> Optional[User]:
        return self.db.query(User).filter(User.passwordResetToken == token_digest).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.flush()
        return new_user

    def update_user(self, user: User, data: Dict) -> User:
        for key, value in data.items():
            setattr(user, key, value)
        self.db.flush()
        return user

    def delete_user(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()

    # --- Roster (assignedStudents) ---

    def add_to_roster(self, faculty: User, student) -> None:
        """Set-union semantics: re-adding a rostered student is a no-op."""
        if student not in faculty.assignedStudents:
            faculty.assignedStudents.append(student)
            self.db.flush()

    def remove_from_roster(self, faculty: User, student) -> None:
        if student in faculty.assignedStudents:
            faculty.assignedStudents.remove(student)
            self.db.flush()

    def replace_roster(self, faculty: User, students: Sequence) -> None:
        # De-duplicate while keeping the caller's order.
        unique = list({s.id: s for s in students}.values())
        faculty.assignedStudents = unique
        self.db.flush()
