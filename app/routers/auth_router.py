# /app/routers/auth_router.py

"""
This module defines the public-facing API for all authentication-related actions.

It includes endpoints for:
- User registration (`/register`)
- Login and token generation (`/login`)
- Password reset (`/forgot-password`, `/reset-password`)
- Retrieving the current user's profile (`/me`)

The router only wires HTTP to the `user_service`; domain errors raised there
are turned into responses by the handlers registered in `app.main`.
"""

from fastapi import APIRouter, Depends, status

from app.core.deps import get_current_user
from app.models import user_model
from app.models.common import MessageResponse
from app.services import user_service
from app.services.database_service import DatabaseService, get_db_service

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=user_model.Token, status_code=status.HTTP_201_CREATED, summary="Register a User")
def register_user(user_in: user_model.UserCreate, db: DatabaseService = Depends(get_db_service)):
    """
    Creates an admin or faculty account and logs it in straight away.
    """
    user_service.register_user(db=db, user_in=user_in)
    return user_service.login(db, email=user_in.email, password=user_in.password)


@router.post("/login", response_model=user_model.Token, summary="Log In")
def login(credentials: user_model.LoginRequest, db: DatabaseService = Depends(get_db_service)):
    return user_service.login(db, email=credentials.email, password=credentials.password)


@router.post("/forgot-password", response_model=MessageResponse, summary="Request a Password Reset")
def forgot_password(payload: user_model.ForgotPasswordRequest, db: DatabaseService = Depends(get_db_service)):
    # Same answer whether or not the account exists.
    user_service.request_password_reset(db, email=payload.email)
    return MessageResponse(message=user_service.RESET_REQUEST_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse, summary="Reset a Password with a Token")
def reset_password(payload: user_model.ResetPasswordRequest, db: DatabaseService = Depends(get_db_service)):
    user_service.reset_password(db, token=payload.token, new_password=payload.password)
    return MessageResponse(message="Password has been reset successfully")


@router.get("/me", response_model=user_model.User, summary="Get the Current User")
def read_current_user(current_user=Depends(get_current_user)):
    """
    Retrieves the profile of the authenticated user. A valid bearer token is
    required.
    """
    return current_user
