"""
Taskie Backend - Access-Control Gate
======================================

What:  FastAPI dependencies that resolve the bearer token to a live User and
       enforce role gates.
How:   `get_current_user` decodes the token and loads the user in the request's
       own session. Role gates are built by `require_role(...)` and compare the
       persisted `current_role` of that freshly loaded user; nothing is cached
       across requests, so a role switch takes effect on the next request.

Usage:
    @router.post("/tasks")
    async def create_task(user: User = Depends(require_requester), ...):
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskie.database import get_db_session
from taskie.exceptions import ForbiddenError, UnauthenticatedError
from taskie.models.user import ROLE_ADMIN, ROLE_REQUESTER, ROLE_TASKER, User
from taskie.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our 401 envelope, not
# FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authorized, no token provided")

    user_id = decode_access_token(credentials.credentials)

    user = await db.get(User, user_id)
    if user is None:
        logger.info("Token subject %s no longer exists", user_id)
        raise UnauthenticatedError("User not found")
    return user


def require_role(role: str, message: str) -> Callable:
    """Build a dependency that passes the current user through only for `role`."""

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.current_role != role:
            raise ForbiddenError(message, context={"required_role": role})
        return user

    return checker


require_requester = require_role(ROLE_REQUESTER, "Not authorized, requester role required")
require_tasker = require_role(ROLE_TASKER, "Not authorized, tasker role required")
require_admin = require_role(ROLE_ADMIN, "Not authorized as admin")
