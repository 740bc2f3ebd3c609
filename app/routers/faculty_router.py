# /app/routers/faculty_router.py

from typing import List

from fastapi import APIRouter, Depends, status

from app.core.deps import require_faculty
from app.models import group_model, student_model
from app.models.common import MessageResponse
from app.models.dashboard_model import FacultyDashboard
from app.services import dashboard_service, group_service, student_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service

# Every endpoint in this router is faculty-only and scoped to the caller.
router = APIRouter()


# --- STUDENT ENDPOINTS (/api/faculty/students) ---

@router.post("/students", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student")
def add_student(
    student_create: student_model.StudentCreate,
    caller: CallerContext = Depends(require_faculty),
    db: DatabaseService = Depends(get_db_service),
):
    return student_service.create_student(db, caller, student_create)


@router.get("/students", response_model=List[student_model.Student], summary="Get My Students")
def get_students(caller: CallerContext = Depends(require_faculty), db: DatabaseService = Depends(get_db_service)):
    return student_service.list_students(db, caller)


@router.get("/students/available", response_model=List[student_model.AvailableStudent], summary="Get Students Available for Grouping")
def get_available_students(caller: CallerContext = Depends(require_faculty), db: DatabaseService = Depends(get_db_service)):
    return student_service.list_available_students(db, caller)


# --- GROUP ENDPOINTS (/api/faculty/groups) ---

@router.post("/groups", response_model=group_model.Group, status_code=status.HTTP_201_CREATED, summary="Create a Group")
def create_group(
    group_create: group_model.GroupCreate,
    caller: CallerContext = Depends(require_faculty),
    db: DatabaseService = Depends(get_db_service),
):
    return group_service.create_group(db, caller, group_create)


@router.get("/groups", response_model=List[group_model.Group], summary="Get My Groups")
def get_groups(caller: CallerContext = Depends(require_faculty), db: DatabaseService = Depends(get_db_service)):
    return group_service.list_groups(db, caller)


@router.put("/groups/{group_id}", response_model=group_model.Group, summary="Update a Group")
def update_group(
    group_id: str,
    group_update: group_model.GroupUpdate,
    caller: CallerContext = Depends(require_faculty),
    db: DatabaseService = Depends(get_db_service),
):
    return group_service.update_group(db, caller, group_id, group_update)


@router.delete("/groups/{group_id}", response_model=MessageResponse, summary="Delete a Group")
def delete_group(group_id: str, caller: CallerContext = Depends(require_faculty), db: DatabaseService = Depends(get_db_service)):
    group_service.delete_group(db, caller, group_id)
    return MessageResponse(message="Group deleted successfully")


# --- DASHBOARD ---

@router.get("/dashboard", response_model=FacultyDashboard, summary="Get Faculty Dashboard")
def get_dashboard(caller: CallerContext = Depends(require_faculty), db: DatabaseService = Depends(get_db_service)):
    return dashboard_service.get_faculty_summary(db, caller)
