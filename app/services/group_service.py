# /app/services/group_service.py

"""
Business logic for the group registry: forming two-student groups, editing
their title or membership, and deleting them.

Membership validation is a single filtered query. A student
that belongs to another faculty, is already grouped, does not exist, or is
listed twice simply does not make it into the match set, and every one of
those cases surfaces as the same InvalidGroupingError.
"""

import logging
import uuid
from typing import List

from app.core import config
from app.core.exceptions import InvalidGroupingError, NotFoundError, ValidationError
from app.models import group_model
from . import integrity_service
from .access_policy import CallerContext, group_scope
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def create_group(db: DatabaseService, caller: CallerContext, group_data: group_model.GroupCreate):
    student_ids = list(group_data.students)
    valid_students = db.find_students_available_for_grouping(student_ids, caller.user_id)
    if len(valid_students) != config.GROUP_SIZE:
        logger.warning(
            "Faculty %s tried to group %s; %d of them available",
            caller.user_id, student_ids, len(valid_students),
        )
        raise InvalidGroupingError()

    record = {
        "id": f"grp_{uuid.uuid4().hex[:12]}",
        "assignmentTitle": group_data.assignmentTitle,
        "facultyId": caller.user_id,
        "googleFormLink": config.DEFAULT_GOOGLE_FORM_LINK,
        "isActive": True,
    }
    with db.unit_of_work():
        new_group = db.add_group(record)
        db.link_students_to_group(student_ids, new_group.id, group_data.assignmentTitle)

    logger.info("Faculty %s created group %s with %s", caller.user_id, new_group.id, student_ids)
    return db.refresh(new_group)


def list_groups(db: DatabaseService, caller: CallerContext) -> List:
    return db.list_groups(*group_scope(caller))


def get_group(db: DatabaseService, caller: CallerContext, group_id: str):
    group = db.get_group_by_id(group_id, *group_scope(caller))
    if group is None:
        raise NotFoundError("Group", group_id)
    return group


def update_group(db: DatabaseService, caller: CallerContext, group_id: str, group_update: group_model.GroupUpdate):
    """
    Title-only edits are applied directly (and mirrored onto the members).
    A new `students` pair must belong to the group's faculty and be either
    ungrouped or already in this group; the old members are then unlinked
    and the new pair linked, as a full replace rather than a diff.
    """
    update_data = group_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    group = get_group(db, caller, group_id)
    new_ids = update_data.pop("students", None)

    if new_ids is not None:
        owned = db.find_students_owned(new_ids, group.facultyId)
        eligible = [s for s in owned if s.groupId in (None, group.id)]
        if len(eligible) != config.GROUP_SIZE:
            raise InvalidGroupingError("Invalid students")

    with db.unit_of_work():
        if update_data:
            db.update_group(group, update_data)
        if new_ids is not None:
            db.unlink_students_from_group(group.id)
            db.link_students_to_group(new_ids, group.id, group.assignmentTitle)
        elif "assignmentTitle" in update_data:
            db.set_title_for_group_members(group.id, group.assignmentTitle)

    logger.info("Faculty %s updated group %s (%s)", caller.user_id, group.id, ", ".join(group_update.model_fields_set))
    return db.refresh(group)


def delete_group(db: DatabaseService, caller: CallerContext, group_id: str) -> None:
    """Deletes the group and frees both members back into the available pool."""
    group = get_group(db, caller, group_id)
    with db.unit_of_work():
        integrity_service.dissolve_group(db, group, reason=f"deleted by {caller.user_id}")
