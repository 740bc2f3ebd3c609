# /tests/test_group_service.py

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core import config
from app.core.exceptions import InvalidGroupingError, NotFoundError, ValidationError
from app.models.group_model import GroupCreate, GroupUpdate
from app.services import group_service, student_service


@pytest.fixture
def pair(faculty_caller, add_student):
    alice = add_student(faculty_caller, "Alice", "A1")
    bob = add_student(faculty_caller, "Bob", "B1")
    return alice, bob


def _form(db_service, caller, students, title="Thesis"):
    return group_service.create_group(db_service, caller, GroupCreate(assignmentTitle=title, students=students))


def test_create_group_links_both_members(db_service, faculty, faculty_caller, pair):
    alice, bob = pair

    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    assert group.facultyId == faculty.id
    assert group.isActive is True
    assert group.googleFormLink == config.DEFAULT_GOOGLE_FORM_LINK
    assert {s.id for s in group.students} == {alice.id, bob.id}
    for member in (alice, bob):
        db_service.refresh(member)
        assert member.groupId == group.id
        assert member.assignmentTitle == "Thesis"


def test_group_requires_exactly_two_students():
    with pytest.raises(PydanticValidationError):
        GroupCreate(assignmentTitle="Thesis", students=["stu_1"])
    with pytest.raises(PydanticValidationError):
        GroupCreate(assignmentTitle="Thesis", students=["stu_1", "stu_2", "stu_3"])


def test_already_grouped_student_is_rejected_without_mutation(db_service, faculty_caller, add_student, pair):
    alice, bob = pair
    carol = add_student(faculty_caller, "Carol", "C1")
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    with pytest.raises(InvalidGroupingError):
        _form(db_service, faculty_caller, [alice.id, carol.id], title="Other")

    assert db_service.count_groups() == 1
    assert db_service.refresh(carol).groupId is None
    assert db_service.refresh(alice).groupId == group.id
    assert alice.assignmentTitle == "Thesis"


def test_cannot_group_another_facultys_student(db_service, faculty_caller, other_caller, add_student, pair):
    alice, _ = pair
    stranger = add_student(other_caller, "Stranger", "S1")

    with pytest.raises(InvalidGroupingError):
        _form(db_service, faculty_caller, [alice.id, stranger.id])
    assert db_service.count_groups() == 0


def test_duplicate_or_unknown_ids_are_rejected(db_service, faculty_caller, pair):
    alice, _ = pair

    with pytest.raises(InvalidGroupingError):
        _form(db_service, faculty_caller, [alice.id, alice.id])
    with pytest.raises(InvalidGroupingError):
        _form(db_service, faculty_caller, [alice.id, "stu_missing"])
    assert db_service.count_groups() == 0


def test_groups_are_scoped_to_their_faculty(db_service, faculty_caller, other_caller, admin_caller, pair):
    alice, bob = pair
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    assert [g.id for g in group_service.list_groups(db_service, faculty_caller)] == [group.id]
    assert group_service.list_groups(db_service, other_caller) == []
    assert [g.id for g in group_service.list_groups(db_service, admin_caller)] == [group.id]

    with pytest.raises(NotFoundError):
        group_service.get_group(db_service, other_caller, group.id)
    with pytest.raises(NotFoundError):
        group_service.delete_group(db_service, other_caller, group.id)
    assert db_service.get_group_by_id(group.id) is not None


def test_title_update_is_mirrored_onto_members(db_service, faculty_caller, pair):
    alice, bob = pair
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    updated = group_service.update_group(db_service, faculty_caller, group.id, GroupUpdate(assignmentTitle="Capstone"))

    assert updated.assignmentTitle == "Capstone"
    assert {db_service.refresh(s).assignmentTitle for s in (alice, bob)} == {"Capstone"}


def test_update_group_replaces_members(db_service, faculty_caller, add_student, pair):
    alice, bob = pair
    carol = add_student(faculty_caller, "Carol", "C1")
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    updated = group_service.update_group(
        db_service, faculty_caller, group.id, GroupUpdate(students=[alice.id, carol.id])
    )

    assert {s.id for s in updated.students} == {alice.id, carol.id}
    assert db_service.refresh(bob).groupId is None
    assert db_service.refresh(carol).groupId == group.id
    assert carol.assignmentTitle == "Thesis"


def test_update_group_rejects_member_of_another_group(db_service, faculty_caller, add_student, pair):
    alice, bob = pair
    carol = add_student(faculty_caller, "Carol", "C1")
    dave = add_student(faculty_caller, "Dave", "D1")
    first = _form(db_service, faculty_caller, [alice.id, bob.id])
    _form(db_service, faculty_caller, [carol.id, dave.id], title="Other")

    with pytest.raises(InvalidGroupingError):
        group_service.update_group(db_service, faculty_caller, first.id, GroupUpdate(students=[alice.id, carol.id]))

    assert {s.id for s in db_service.refresh(first).students} == {alice.id, bob.id}


def test_update_group_requires_data(db_service, faculty_caller, pair):
    alice, bob = pair
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    with pytest.raises(ValidationError):
        group_service.update_group(db_service, faculty_caller, group.id, GroupUpdate())


def test_delete_group_frees_members_and_keeps_their_title(db_service, faculty_caller, pair):
    alice, bob = pair
    group = _form(db_service, faculty_caller, [alice.id, bob.id])

    group_service.delete_group(db_service, faculty_caller, group.id)

    assert db_service.get_group_by_id(group.id) is None
    available = student_service.list_available_students(db_service, faculty_caller)
    assert {s.id for s in available} == {alice.id, bob.id}
    assert db_service.refresh(alice).assignmentTitle == "Thesis"


def test_freed_students_can_be_regrouped(db_service, faculty_caller, pair):
    alice, bob = pair
    group = _form(db_service, faculty_caller, [alice.id, bob.id])
    group_service.delete_group(db_service, faculty_caller, group.id)

    regrouped = _form(db_service, faculty_caller, [bob.id, alice.id], title="Second Try")

    assert {s.id for s in regrouped.students} == {alice.id, bob.id}
