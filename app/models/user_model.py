# /app/models/user_model.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core import config
from .common import NonEmptyStr, StudentSummary

Role = Literal["admin", "faculty"]


class UserCreate(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=config.MIN_PASSWORD_LENGTH)
    role: Role = "faculty"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: NonEmptyStr
    password: str = Field(..., min_length=config.MIN_PASSWORD_LENGTH)


class User(BaseModel):
    """A user as returned by the API. Never carries the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None


class Faculty(User):
    """A faculty member together with the roster of assigned students."""
    assignedStudents: List[StudentSummary] = Field(default_factory=list)


class FacultyUpdate(BaseModel):
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    assignedStudents: Optional[List[NonEmptyStr]] = None


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: User
