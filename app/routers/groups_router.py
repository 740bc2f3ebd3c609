# /app/routers/groups_router.py

from typing import List

from fastapi import APIRouter, Depends

from app.core.deps import get_current_caller
from app.models import group_model
from app.services import group_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[group_model.Group], summary="Get Groups in Scope")
def get_groups(caller: CallerContext = Depends(get_current_caller), db: DatabaseService = Depends(get_db_service)):
    """All groups for an admin; only the groups they created for a faculty member."""
    return group_service.list_groups(db, caller)


@router.get("/{group_id}", response_model=group_model.Group, summary="Get a Single Group")
def get_group(group_id: str, caller: CallerContext = Depends(get_current_caller), db: DatabaseService = Depends(get_db_service)):
    return group_service.get_group(db, caller, group_id)
