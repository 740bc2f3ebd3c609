# /app/services/database_helpers/group_repository_sql.py

"""Raw SQLAlchemy queries for the `groups` table."""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from app.db.models.group_model import Group


class GroupRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _query(self, *scope):
        return (
            self.db.query(Group)
            .options(selectinload(Group.students), selectinload(Group.faculty))
            .filter(*scope)
        )

    def get_group_by_id(self, group_id: str, *scope) -> Optional[Group]:
        return self._query(Group.id == group_id, *scope).first()

    def list_groups(self, *scope) -> List[Group]:
        return self._query(*scope).order_by(Group.created_at.desc(), Group.id.desc()).all()

    def find_by_faculty(self, faculty_id: str) -> List[Group]:
        return self.db.query(Group).filter(Group.facultyId == faculty_id).all()

    def all_groups(self) -> List[Group]:
        return self._query().all()

    def count_groups(self, *scope) -> int:
        return self.db.query(Group).filter(*scope).count()

    def recent_groups(self, *scope, limit: int = 5) -> List[Group]:
        return self._query(*scope).order_by(Group.created_at.desc(), Group.id.desc()).limit(limit).all()

    def add_group(self, record: Dict) -> Group:
        new_group = Group(**record)
        self.db.add(new_group)
        self.db.flush()
        return new_group

    def update_group(self, group: Group, data: Dict) -> Group:
        for key, value in data.items():
            setattr(group, key, value)
        self.db.flush()
        return group

    def delete_group(self, group: Group) -> None:
        self.db.delete(group)
        self.db.flush()
