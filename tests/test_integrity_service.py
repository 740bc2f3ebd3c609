# /tests/test_integrity_service.py

import pytest

from app.core.exceptions import InvalidGroupingError
from app.db.models.student_models import Student
from app.models.group_model import GroupCreate
from app.models.integrity_model import IntegrityIssue
from app.models.user_model import FacultyUpdate
from app.services import group_service, integrity_service, user_service


def _group(db_service, caller, students, title="Thesis"):
    return group_service.create_group(db_service, caller, GroupCreate(assignmentTitle=title, students=students))


def test_end_to_end_two_faculty_scenario(db_service, faculty, other_faculty, faculty_caller, other_caller, add_student):
    """
    Faculty F1 owns A1 and A2, faculty F2 owns B1. F1 may group A1+A2 but
    never A1+B1, and deleting F1 removes the group and unlinks A1 and A2.
    """
    a1 = add_student(faculty_caller, "Alice One", "A1")
    a2 = add_student(faculty_caller, "Alice Two", "A2")
    b1 = add_student(other_caller, "Bob One", "B1")

    with pytest.raises(InvalidGroupingError):
        _group(db_service, faculty_caller, [a1.id, b1.id])
    group = _group(db_service, faculty_caller, [a1.id, a2.id])
    assert {s.id for s in group.students} == {a1.id, a2.id}

    result = user_service.delete_faculty(db_service, faculty.id)

    assert result == {"groupsDeleted": 1, "studentsUnlinked": 2}
    assert db_service.get_group_by_id(group.id) is None
    for student in (a1, a2):
        db_service.refresh(student)
        assert student.assignedFacultyId is None
        assert student.groupId is None
    assert db_service.refresh(b1).assignedFacultyId == other_faculty.id
    assert integrity_service.check_integrity(db_service).consistent


def test_consistent_database_reports_no_issues(db_service, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    b = add_student(faculty_caller, "Bob", "B1")
    _group(db_service, faculty_caller, [a.id, b.id])

    report = integrity_service.check_integrity(db_service)

    assert report.consistent is True
    assert report.issues == []
    assert report.repaired is False
    assert integrity_service.repair(db_service).repaired is False


def test_repair_dissolves_an_undersized_group(db_service, session, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    b = add_student(faculty_caller, "Bob", "B1")
    group = _group(db_service, faculty_caller, [a.id, b.id])
    # A row edited by hand leaves the group with one member.
    session.query(Student).filter(Student.id == b.id).update({Student.groupId: None}, synchronize_session="fetch")
    session.commit()

    report = integrity_service.check_integrity(db_service)
    assert [(i.kind, i.entity_id) for i in report.issues] == [("group_size", group.id)]
    assert db_service.get_group_by_id(group.id) is not None

    repaired = integrity_service.repair(db_service)

    assert repaired.repaired is True
    assert db_service.get_group_by_id(group.id) is None
    assert db_service.refresh(a).groupId is None
    assert integrity_service.check_integrity(db_service).consistent


def test_repair_heals_a_cross_faculty_group(db_service, session, other_faculty, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    b = add_student(faculty_caller, "Bob", "B1")
    group = _group(db_service, faculty_caller, [a.id, b.id])
    session.query(Student).filter(Student.id == b.id).update(
        {Student.assignedFacultyId: other_faculty.id}, synchronize_session="fetch"
    )
    session.commit()

    kinds = [i.kind for i in integrity_service.check_integrity(db_service).issues]
    assert kinds == ["group_ownership"]

    integrity_service.repair(db_service)

    assert db_service.get_group_by_id(group.id) is None
    assert db_service.refresh(b).assignedFacultyId == other_faculty.id


def test_repair_clears_non_faculty_owner(db_service, session, admin, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    session.query(Student).filter(Student.id == a.id).update(
        {Student.assignedFacultyId: admin.id}, synchronize_session="fetch"
    )
    session.commit()

    issues = integrity_service.check_integrity(db_service).issues
    assert [(i.kind, i.entity) for i in issues] == [("student_faculty", "student")]

    integrity_service.repair(db_service)

    assert db_service.refresh(a).assignedFacultyId is None


def test_repair_is_idempotent(db_service, session, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    b = add_student(faculty_caller, "Bob", "B1")
    _group(db_service, faculty_caller, [a.id, b.id])
    session.query(Student).filter(Student.id == a.id).update({Student.groupId: None}, synchronize_session="fetch")
    session.commit()

    first = integrity_service.repair(db_service)
    second = integrity_service.repair(db_service)

    assert first.repaired is True
    assert second.repaired is False
    assert second.issues == []


def test_faculty_delete_leaves_other_rosters_alone(db_service, faculty, other_faculty, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    user_service.update_faculty(db_service, other_faculty.id, FacultyUpdate(assignedStudents=[a.id]))

    user_service.delete_faculty(db_service, faculty.id)

    roster = db_service.refresh(other_faculty).assignedStudents
    assert [s.id for s in roster] == [a.id]


def test_repair_reports_what_is_still_inconsistent(db_service, mocker):
    """The returned report reflects a fresh check after the repair commits."""
    leftover = IntegrityIssue(kind="group_size", entity="group", entity_id="grp_gone", message="Group has 1 member(s)")
    mocker.patch.object(integrity_service, "_collect_issues", side_effect=[[leftover], [leftover]])

    report = integrity_service.repair(db_service)

    assert report.repaired is True
    assert report.consistent is False


def test_repair_reports_consistent_after_healing(db_service, session, faculty_caller, add_student):
    a = add_student(faculty_caller, "Alice", "A1")
    b = add_student(faculty_caller, "Bob", "B1")
    _group(db_service, faculty_caller, [a.id, b.id])
    session.query(Student).filter(Student.id == a.id).update({Student.groupId: None}, synchronize_session="fetch")
    session.commit()

    report = integrity_service.repair(db_service)

    assert report.repaired is True
    assert report.consistent is True
