# /app/models/report_model.py

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict, HttpUrl

from .common import NonEmptyStr


class WeeklyReport(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week: int
    report: str
    submittedAt: Optional[datetime] = None


class WeeklyReportCreate(BaseModel):
    week: int = Field(..., ge=1, description="Week number the report covers; any positive integer.")
    report: NonEmptyStr


class WeeklyReportUpdate(BaseModel):
    report: NonEmptyStr


class SheetRow(BaseModel):
    """One spreadsheet row, keyed by the sheet's header cells."""
    regNo: str
    values: Dict[str, str] = Field(default_factory=dict)


class SheetGrid(BaseModel):
    """The raw 2-D grid read from the external spreadsheet."""
    data: List[List[str]] = Field(default_factory=list)
    message: str


class SheetLinkUpdate(BaseModel):
    """The student's own filled copy of the report sheet."""
    filledGoogleSheet: HttpUrl = Field(..., description="Filled Google Sheet must be a valid URL.")
