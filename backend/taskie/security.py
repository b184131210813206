"""
Taskie Backend - Token Issuance & Verification
================================================

What:  Issues and verifies the bearer tokens handed out at register/login.
How:   HS256-signed JWT (PyJWT) with claims:
         - sub: user id (UUID string)
         - iat: issued-at, epoch seconds (UTC)
         - exp: expiry, `jwt_expire_days` after issuance
Who:   Used by the user service (issue) and the auth gate (verify).

There is no refresh and no revocation list: a reissued token coexists with
older ones until each expires on its own.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from taskie.config import settings
from taskie.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expires_at = now + (expires_delta or timedelta(days=settings.jwt_expire_days))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify signature and expiry, then return the embedded user id.

    Raises:
        UnauthenticatedError: expired, badly signed, malformed, or missing `sub`
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise UnauthenticatedError()
    except jwt.InvalidTokenError as e:
        logger.info("Rejected invalid token: %s", type(e).__name__)
        raise UnauthenticatedError()

    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise UnauthenticatedError()
