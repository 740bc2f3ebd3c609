# /app/core/deps.py

"""
FastAPI dependencies for authentication and role guards.

`get_current_caller` resolves the bearer token into a `CallerContext`;
`require_admin` / `require_faculty` additionally enforce the route's role.
Services receive the context explicitly and never read ambient state.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.db.models.user_model import ROLE_ADMIN, ROLE_FACULTY
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService, get_db_service
from .exceptions import AuthError, ForbiddenRoleError
from .security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing or non-Bearer header reaches AuthError (401).
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DatabaseService = Depends(get_db_service),
):
    """Returns the User row behind the bearer token."""
    if credentials is None:
        raise AuthError("No token, authorization denied")

    payload = decode_access_token(credentials.credentials)
    user = db.get_user_by_id(payload["sub"])
    if user is None:
        # The account was deleted after the token was issued.
        logger.warning("Token for unknown user %s rejected", payload["sub"])
        raise AuthError("Token is not valid")
    return user


def get_current_caller(user=Depends(get_current_user)) -> CallerContext:
    return CallerContext(user_id=user.id, role=user.role, email=user.email)


def require_admin(caller: CallerContext = Depends(get_current_caller)) -> CallerContext:
    if caller.role != ROLE_ADMIN:
        raise ForbiddenRoleError(ROLE_ADMIN)
    return caller


def require_faculty(caller: CallerContext = Depends(get_current_caller)) -> CallerContext:
    if caller.role != ROLE_FACULTY:
        raise ForbiddenRoleError(ROLE_FACULTY)
    return caller
