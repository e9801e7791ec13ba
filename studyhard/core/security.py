"""
Security module — Cookie-borne JWT sessions.

Auth Flow:
1. Client authenticates with its identity provider (outside this service)
2. Client POSTs the resulting identity payload to /jwt
3. FastAPI signs it (HS256, 9h expiry) and sets it as an http-only cookie
4. Every protected route reads the cookie, verifies the signature and expiry,
   and receives the decoded identity as an explicit dependency value
5. /logout clears the cookie

The identity is never looked up in a user store; its trustworthiness rests
entirely on the token signature.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie

from studyhard.core.config import settings

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "unauthorized access"

cookie_scheme = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)


def _secret() -> str:
    if not settings.ACCESS_TOKEN_SECRET:
        raise RuntimeError("ACCESS_TOKEN_SECRET is not configured")
    return settings.ACCESS_TOKEN_SECRET


# ---------------------------------------------------------------------------
# Token issuance / verification
# ---------------------------------------------------------------------------
def create_access_token(identity: dict) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **identity,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(payload, _secret(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Return the verified payload, or None for any bad/expired token."""
    try:
        return jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.TOKEN_EXPIRE_HOURS * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


# ---------------------------------------------------------------------------
# Authentication gate
# ---------------------------------------------------------------------------
async def get_current_user(
    token: str | None = Depends(cookie_scheme),
) -> dict:
    """
    Validate the session cookie and return the identity dict.

    Usage:
        @router.post("/assignments")
        async def endpoint(user: dict = Depends(get_current_user)):
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
        )

    payload = decode_access_token(token)
    if not payload or not payload.get("email"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
        )

    return payload
