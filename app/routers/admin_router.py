# /app/routers/admin_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.deps import require_admin
from app.models import student_model, user_model
from app.models.common import MessageResponse
from app.models.dashboard_model import AdminDashboard
from app.models.integrity_model import IntegrityReport
from app.services import dashboard_service, integrity_service, student_service, user_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service

# Every endpoint in this router is admin-only.
router = APIRouter(dependencies=[Depends(require_admin)])


# --- STUDENT ENDPOINTS (/api/admin/students) ---

@router.get("/students", response_model=List[student_model.Student], summary="Get All Students")
def get_students(
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name or regNo."),
    faculty: Optional[str] = Query(default=None, description="Only students owned by this faculty ID."),
    caller: CallerContext = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    return student_service.list_students(db, caller, search=search, faculty_id=faculty)


@router.get("/students/{student_id}/reports", response_model=student_model.StudentReports, summary="Get a Student's Weekly Reports")
def get_student_reports(student_id: str, db: DatabaseService = Depends(get_db_service)):
    return student_service.get_student_reports(db, student_id)


@router.put("/students/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student(student_id: str, student_update: student_model.StudentUpdate, db: DatabaseService = Depends(get_db_service)):
    return student_service.update_student(db, student_id, student_update)


@router.delete("/students/{student_id}", response_model=MessageResponse, summary="Delete a Student")
def delete_student(student_id: str, db: DatabaseService = Depends(get_db_service)):
    student_service.delete_student(db, student_id)
    return MessageResponse(message="Student deleted successfully")


# --- FACULTY ENDPOINTS (/api/admin/faculty) ---

@router.get("/faculty", response_model=List[user_model.Faculty], summary="Get All Faculty")
def get_faculty(db: DatabaseService = Depends(get_db_service)):
    return user_service.list_faculty(db)


@router.put("/faculty/{faculty_id}", response_model=user_model.Faculty, summary="Update a Faculty Member")
def update_faculty(faculty_id: str, faculty_update: user_model.FacultyUpdate, db: DatabaseService = Depends(get_db_service)):
    return user_service.update_faculty(db, faculty_id, faculty_update)


@router.delete("/faculty/{faculty_id}", response_model=MessageResponse, summary="Delete a Faculty Member")
def delete_faculty(faculty_id: str, db: DatabaseService = Depends(get_db_service)):
    user_service.delete_faculty(db, faculty_id)
    return MessageResponse(message="Faculty deleted successfully")


# --- DASHBOARD & MAINTENANCE ---

@router.get("/dashboard", response_model=AdminDashboard, summary="Get Admin Dashboard")
def get_dashboard(db: DatabaseService = Depends(get_db_service)):
    return dashboard_service.get_admin_summary(db)


@router.get("/integrity", response_model=IntegrityReport, summary="Check Referential Integrity")
def check_integrity(db: DatabaseService = Depends(get_db_service)):
    """Lists every student/group/faculty inconsistency without changing data."""
    return integrity_service.check_integrity(db)


@router.post("/integrity/repair", response_model=IntegrityReport, summary="Repair Referential Integrity")
def repair_integrity(db: DatabaseService = Depends(get_db_service)):
    """Heals the inconsistencies reported by the check. Safe to run repeatedly."""
    return integrity_service.repair(db)
