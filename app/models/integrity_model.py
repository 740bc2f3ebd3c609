# /app/models/integrity_model.py

from typing import List

from pydantic import BaseModel, Field


class IntegrityIssue(BaseModel):
    kind: str = Field(..., description="Machine-readable issue type, e.g. 'group_size'.")
    entity: str = Field(..., description="'student', 'group' or 'user'.")
    entity_id: str
    message: str


class IntegrityReport(BaseModel):
    """Result of a consistency check; `repaired` is false for a dry run."""
    issues: List[IntegrityIssue] = Field(default_factory=list)
    consistent: bool = True
    repaired: bool = False
