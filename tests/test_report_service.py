# /tests/test_report_service.py

import pytest

from app.core.exceptions import DuplicateKeyError, NotFoundError
from app.db.models.student_models import WeeklyReport
from app.services import report_service, student_service
from app.services.sheet_service import ReportSheetService


@pytest.fixture
def alice(faculty_caller, add_student):
    return add_student(faculty_caller, "Alice", "CS-001")


def test_add_weekly_report(db_service, faculty_caller, alice):
    student = report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "Literature review")

    assert [(r.week, r.report) for r in student.weeklyReports] == [(1, "Literature review")]
    assert student.weeklyReports[0].submittedAt is not None


def test_reports_are_ordered_by_week(db_service, faculty_caller, alice):
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 3, "Third")
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "First")

    student = report_service.get_student_reports(db_service, faculty_caller, alice.id)
    assert [r.week for r in student.weeklyReports] == [1, 3]


def test_duplicate_week_is_rejected(db_service, faculty_caller, alice):
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "First")

    with pytest.raises(DuplicateKeyError) as exc_info:
        report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "Again")
    assert "Use update instead" in exc_info.value.message

    student = student_service.get_student_reports(db_service, alice.id)
    assert [r.report for r in student.weeklyReports] == ["First"]


def test_update_and_delete_address_reports_by_week(db_service, faculty_caller, alice):
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "First")
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 2, "Second")

    student = report_service.update_weekly_report(db_service, faculty_caller, alice.id, 2, "Second, revised")
    assert {r.week: r.report for r in student.weeklyReports} == {1: "First", 2: "Second, revised"}

    student = report_service.delete_weekly_report(db_service, faculty_caller, alice.id, 1)
    assert [r.week for r in student.weeklyReports] == [2]


def test_missing_week_is_not_found(db_service, faculty_caller, alice):
    with pytest.raises(NotFoundError):
        report_service.update_weekly_report(db_service, faculty_caller, alice.id, 5, "Nope")
    with pytest.raises(NotFoundError):
        report_service.delete_weekly_report(db_service, faculty_caller, alice.id, 5)


def test_other_faculty_cannot_touch_reports(db_service, other_caller, admin_caller, faculty_caller, alice):
    with pytest.raises(NotFoundError):
        report_service.add_weekly_report(db_service, other_caller, alice.id, 1, "Sneaky")

    # Administrators are not scoped.
    student = report_service.add_weekly_report(db_service, admin_caller, alice.id, 1, "By admin")
    assert [r.week for r in student.weeklyReports] == [1]


def test_deleting_a_student_deletes_its_reports(db_service, session, faculty_caller, alice):
    report_service.add_weekly_report(db_service, faculty_caller, alice.id, 1, "First")
    student_service.delete_student(db_service, alice.id)

    assert session.query(WeeklyReport).count() == 0


def test_student_sheet_row_uses_the_stored_reg_no(db_service, faculty_caller, alice, mocker):
    sheet = mocker.Mock(spec=ReportSheetService)
    sheet.find_row.return_value = {"Registration Number": "CS-001", "Week 1": "Done"}

    row = report_service.get_student_sheet_row(db_service, faculty_caller, alice.id, sheet)

    sheet.find_row.assert_called_once_with("CS-001")
    assert row.regNo == "CS-001"
    assert row.values["Week 1"] == "Done"


def test_student_sheet_row_not_found(db_service, faculty_caller, alice, mocker):
    sheet = mocker.Mock(spec=ReportSheetService)
    sheet.find_row.return_value = None

    with pytest.raises(NotFoundError):
        report_service.get_student_sheet_row(db_service, faculty_caller, alice.id, sheet)


def test_empty_sheet_grid_has_a_message(mocker):
    sheet = mocker.Mock(spec=ReportSheetService)
    sheet.fetch_grid.return_value = []

    grid = report_service.get_sheet_grid(sheet)

    assert grid.data == []
    assert grid.message == "No data available in Google Sheets"


def test_set_filled_sheet_link(db_service, faculty_caller, alice):
    url = "https://docs.google.com/spreadsheets/d/abc123/edit"

    student = report_service.set_filled_sheet_link(db_service, faculty_caller, alice.id, url)

    assert student.filledGoogleSheet == url
    assert report_service.get_student_reports(db_service, faculty_caller, alice.id).filledGoogleSheet == url


def test_filled_sheet_link_is_scoped(db_service, other_caller, alice):
    with pytest.raises(NotFoundError):
        report_service.set_filled_sheet_link(db_service, other_caller, alice.id, "https://example.com/sheet")
    assert db_service.refresh(alice).filledGoogleSheet is None


def test_weeks_have_no_upper_bound(db_service, faculty_caller, alice):
    student = report_service.add_weekly_report(db_service, faculty_caller, alice.id, 60, "Extended project")

    assert [r.week for r in student.weeklyReports] == [60]
