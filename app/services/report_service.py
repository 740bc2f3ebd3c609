# /app/services/report_service.py

"""
Weekly progress reports. Reports are keyed by week number, never by list
position: adding an existing week fails, updating or deleting a missing
week fails.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateKeyError, NotFoundError
from app.models import report_model
from . import student_service
from .access_policy import CallerContext
from .database_service import DatabaseService
from .sheet_service import ReportSheetService

logger = logging.getLogger(__name__)


def get_student_reports(db: DatabaseService, caller: CallerContext, student_id: str):
    return student_service.get_student(db, caller, student_id)


def add_weekly_report(db: DatabaseService, caller: CallerContext, student_id: str, week: int, text: str):
    student = student_service.get_student(db, caller, student_id)
    if db.get_weekly_report(student.id, week) is not None:
        raise DuplicateKeyError("week", week, message=f"Report for week {week} already exists. Use update instead.")

    record = {
        "id": f"rep_{uuid.uuid4().hex[:12]}",
        "week": week,
        "report": text,
        "submittedAt": datetime.now(timezone.utc),
    }
    try:
        with db.unit_of_work():
            db.add_weekly_report(student, record)
    except IntegrityError:
        raise DuplicateKeyError("week", week, message=f"Report for week {week} already exists. Use update instead.")

    logger.info("Week %d report added for student %s by %s", week, student.id, caller.user_id)
    return db.refresh(student)


def update_weekly_report(db: DatabaseService, caller: CallerContext, student_id: str, week: int, text: str):
    student = student_service.get_student(db, caller, student_id)
    report = db.get_weekly_report(student.id, week)
    if report is None:
        raise NotFoundError(f"Report for week {week}")

    with db.unit_of_work():
        db.update_weekly_report(report, {"report": text, "submittedAt": datetime.now(timezone.utc)})

    logger.info("Week %d report updated for student %s by %s", week, student.id, caller.user_id)
    return db.refresh(student)


def delete_weekly_report(db: DatabaseService, caller: CallerContext, student_id: str, week: int):
    student = student_service.get_student(db, caller, student_id)
    report = db.get_weekly_report(student.id, week)
    if report is None:
        raise NotFoundError(f"Report for week {week}")

    with db.unit_of_work():
        db.delete_weekly_report(student, report)

    logger.info("Week %d report deleted for student %s by %s", week, student.id, caller.user_id)
    return db.refresh(student)


def set_filled_sheet_link(db: DatabaseService, caller: CallerContext, student_id: str, url: str):
    """Stores the link to the student's filled copy of the report sheet."""
    student = student_service.get_student(db, caller, student_id)
    with db.unit_of_work():
        db.update_student(student, {"filledGoogleSheet": url})

    logger.info("Filled sheet link set for student %s by %s", student.id, caller.user_id)
    return db.refresh(student)


# --- Spreadsheet Read-Through ---

def get_sheet_grid(sheet: ReportSheetService) -> report_model.SheetGrid:
    grid = sheet.fetch_grid()
    if not grid:
        return report_model.SheetGrid(data=[], message="No data available in Google Sheets")
    return report_model.SheetGrid(
        data=[[str(cell) for cell in row] for row in grid],
        message="Successfully fetched Google Sheets data",
    )


def get_student_sheet_row(
    db: DatabaseService,
    caller: CallerContext,
    student_id: str,
    sheet: ReportSheetService,
) -> report_model.SheetRow:
    student = student_service.get_student(db, caller, student_id)
    row: Optional[dict] = sheet.find_row(student.regNo)
    if row is None:
        raise NotFoundError("Spreadsheet row for registration number", student.regNo)
    return report_model.SheetRow(regNo=student.regNo, values=row)
