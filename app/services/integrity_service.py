# /app/services/integrity_service.py

"""
Referential integrity coordinator for students, faculty and groups.

Every mutation that touches more than one record goes through here, and runs
inside the caller's `DatabaseService.unit_of_work()` so that it either lands
completely or not at all:

- unlink/cascade happens in the same transaction as the delete;
- availability is validated before a student is linked to a group;
- a group is never left with fewer than two members: when a member is
  deleted or moved to another faculty, the group is dissolved and the other
  member goes back to the available pool.

`check_integrity` and `repair` form the reconciliation pass. They detect and
heal states that the rules above forbid (for example rows written by older
code or by hand), and running `repair` twice changes nothing the second time.
"""

import logging
from typing import Dict, List, Set

from app.core import config
from app.db.models.user_model import ROLE_FACULTY
from app.models.integrity_model import IntegrityIssue, IntegrityReport
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Cascades ---

def dissolve_group(db: DatabaseService, group, reason: str) -> int:
    """
    Unlinks every member of the group and deletes it. Members keep their
    assignmentTitle as history. Returns the number of students freed.
    """
    freed = db.unlink_students_from_group(group.id)
    db.delete_group(group)
    logger.info("Dissolved group %s (%s); %d student(s) freed", group.id, reason, freed)
    return freed


def cascade_delete_student(db: DatabaseService, student) -> None:
    """Dissolves the student's group, then deletes the student with its reports and roster links."""
    if student.groupId:
        group = db.get_group_by_id(student.groupId)
        if group is not None:
            dissolve_group(db, group, reason=f"member {student.id} deleted")
    db.delete_student(student)
    logger.info("Deleted student %s (%s)", student.id, student.regNo)


def cascade_delete_faculty(db: DatabaseService, faculty) -> Dict[str, int]:
    """
    Deletes every group the faculty created (unlinking its members), clears
    assignedFacultyId on the faculty's students, then deletes the user.
    """
    groups = db.find_groups_by_faculty(faculty.id)
    for group in groups:
        dissolve_group(db, group, reason=f"faculty {faculty.id} deleted")
    unlinked = db.unlink_students_from_faculty(faculty.id)
    db.delete_user(faculty)
    logger.info(
        "Deleted faculty %s: %d group(s) deleted, %d student(s) unlinked",
        faculty.id, len(groups), unlinked,
    )
    return {"groupsDeleted": len(groups), "studentsUnlinked": unlinked}


def reassign_student(db: DatabaseService, student, new_faculty) -> None:
    """
    Moves a student to another faculty: roster links follow the student and a
    group membership is dissolved, since a group never spans two faculties.
    """
    old_faculty = db.get_user_by_id(student.assignedFacultyId) if student.assignedFacultyId else None
    if old_faculty is not None and old_faculty.id == new_faculty.id:
        return

    if student.groupId:
        group = db.get_group_by_id(student.groupId)
        if group is not None:
            dissolve_group(db, group, reason=f"member {student.id} moved to faculty {new_faculty.id}")

    if old_faculty is not None:
        db.remove_from_roster(old_faculty, student)
    db.update_student(student, {"assignedFacultyId": new_faculty.id})
    db.add_to_roster(new_faculty, student)
    logger.info("Reassigned student %s to faculty %s", student.id, new_faculty.id)


# --- Reconciliation Pass ---

def _collect_issues(db: DatabaseService) -> List[IntegrityIssue]:
    issues: List[IntegrityIssue] = []
    faculty_ids: Set[str] = {u.id for u in db.find_users_by_role(ROLE_FACULTY)}
    groups = db.get_all_groups()
    group_ids = {g.id for g in groups}

    for group in groups:
        members = list(group.students)
        if group.facultyId not in faculty_ids:
            issues.append(IntegrityIssue(
                kind="group_owner", entity="group", entity_id=group.id,
                message=f"Group owner {group.facultyId} is not an existing faculty user",
            ))
        elif len(members) != config.GROUP_SIZE:
            issues.append(IntegrityIssue(
                kind="group_size", entity="group", entity_id=group.id,
                message=f"Group has {len(members)} member(s), expected {config.GROUP_SIZE}",
            ))
        elif any(m.assignedFacultyId != group.facultyId for m in members):
            issues.append(IntegrityIssue(
                kind="group_ownership", entity="group", entity_id=group.id,
                message="Group members belong to a different faculty than the group",
            ))

    for student in db.get_all_students():
        if student.assignedFacultyId and student.assignedFacultyId not in faculty_ids:
            issues.append(IntegrityIssue(
                kind="student_faculty", entity="student", entity_id=student.id,
                message=f"assignedFaculty {student.assignedFacultyId} is not an existing faculty user",
            ))
        if student.groupId and student.groupId not in group_ids:
            issues.append(IntegrityIssue(
                kind="student_group", entity="student", entity_id=student.id,
                message=f"groupId {student.groupId} references a missing group",
            ))
    return issues


def check_integrity(db: DatabaseService) -> IntegrityReport:
    """Dry run: reports every violation without changing anything."""
    issues = _collect_issues(db)
    return IntegrityReport(issues=issues, consistent=not issues, repaired=False)


def repair(db: DatabaseService) -> IntegrityReport:
    """Heals every violation found by `check_integrity` in one transaction."""
    issues = _collect_issues(db)
    if not issues:
        return IntegrityReport(issues=[], consistent=True, repaired=False)

    with db.unit_of_work():
        for issue in issues:
            if issue.entity == "group":
                group = db.get_group_by_id(issue.entity_id)
                if group is not None:
                    dissolve_group(db, group, reason=f"repair: {issue.kind}")
            elif issue.kind == "student_faculty":
                student = db.get_student_by_id(issue.entity_id)
                db.update_student(student, {"assignedFacultyId": None})
            elif issue.kind == "student_group":
                student = db.get_student_by_id(issue.entity_id)
                db.update_student(student, {"groupId": None})

    remaining = _collect_issues(db)
    logger.warning("Integrity repair healed %d issue(s), %d remaining", len(issues), len(remaining))
    return IntegrityReport(issues=issues, consistent=not remaining, repaired=True)
