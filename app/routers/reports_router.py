# /app/routers/reports_router.py

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.core.deps import get_current_caller
from app.models import report_model, student_model
from app.services import report_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service
from app.services.sheet_service import ReportSheetService, get_sheet_service

router = APIRouter()

Week = Annotated[int, Path(ge=1, description="Week number of the report.")]


@router.get("/student/{student_id}", response_model=student_model.StudentReports, summary="Get a Student's Weekly Reports")
def get_student_reports(student_id: str, caller: CallerContext = Depends(get_current_caller), db: DatabaseService = Depends(get_db_service)):
    return report_service.get_student_reports(db, caller, student_id)


@router.post("/student/{student_id}", response_model=student_model.StudentReports, status_code=status.HTTP_201_CREATED, summary="Add a Weekly Report")
def add_weekly_report(
    student_id: str,
    payload: report_model.WeeklyReportCreate,
    caller: CallerContext = Depends(get_current_caller),
    db: DatabaseService = Depends(get_db_service),
):
    return report_service.add_weekly_report(db, caller, student_id, payload.week, payload.report)


@router.put("/student/{student_id}/week/{week}", response_model=student_model.StudentReports, summary="Update a Weekly Report")
def update_weekly_report(
    student_id: str,
    week: Week,
    payload: report_model.WeeklyReportUpdate,
    caller: CallerContext = Depends(get_current_caller),
    db: DatabaseService = Depends(get_db_service),
):
    return report_service.update_weekly_report(db, caller, student_id, week, payload.report)


@router.delete("/student/{student_id}/week/{week}", response_model=student_model.StudentReports, summary="Delete a Weekly Report")
def delete_weekly_report(
    student_id: str,
    week: Week,
    caller: CallerContext = Depends(get_current_caller),
    db: DatabaseService = Depends(get_db_service),
):
    return report_service.delete_weekly_report(db, caller, student_id, week)


@router.put("/student/{student_id}/sheet-link", response_model=student_model.StudentReports, summary="Set a Student's Filled Sheet Link")
def set_filled_sheet_link(
    student_id: str,
    payload: report_model.SheetLinkUpdate,
    caller: CallerContext = Depends(get_current_caller),
    db: DatabaseService = Depends(get_db_service),
):
    return report_service.set_filled_sheet_link(db, caller, student_id, str(payload.filledGoogleSheet))


@router.get("/student/{student_id}/sheet", response_model=report_model.SheetRow, summary="Get a Student's Spreadsheet Row")
def get_student_sheet_row(
    student_id: str,
    caller: CallerContext = Depends(get_current_caller),
    db: DatabaseService = Depends(get_db_service),
    sheet: ReportSheetService = Depends(get_sheet_service),
):
    return report_service.get_student_sheet_row(db, caller, student_id, sheet)


@router.get("/google-sheets", response_model=report_model.SheetGrid, summary="Get Google Sheets Data")
def get_google_sheets(caller: CallerContext = Depends(get_current_caller), sheet: ReportSheetService = Depends(get_sheet_service)):
    return report_service.get_sheet_grid(sheet)
