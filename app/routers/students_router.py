# /app/routers/students_router.py

from typing import List

from fastapi import APIRouter, Depends

from app.core.deps import get_current_caller
from app.models import student_model
from app.services import student_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[student_model.Student], summary="Get Students in Scope")
def get_students(caller: CallerContext = Depends(get_current_caller), db: DatabaseService = Depends(get_db_service)):
    """All students for an admin; only their own students for a faculty member."""
    return student_service.list_students(db, caller)


@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: str, caller: CallerContext = Depends(get_current_caller), db: DatabaseService = Depends(get_db_service)):
    return student_service.get_student(db, caller, student_id)
