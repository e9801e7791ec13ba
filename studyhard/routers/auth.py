"""
Auth router — Issue and revoke the session cookie.

Rules:
- /jwt signs the identity payload the client sends; no credential check
  happens here, the caller is expected to have authenticated with the
  identity provider first
- The token lives only in an http-only cookie
- /logout is idempotent
"""

import logging

from fastapi import APIRouter, Response

from studyhard.core.security import (
    create_access_token,
    set_session_cookie,
    clear_session_cookie,
)
from studyhard.schemas.auth import SessionIdentity
from studyhard.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/jwt")
async def issue_token(body: SessionIdentity, response: Response):
    token = create_access_token(body.model_dump(exclude_none=True))
    set_session_cookie(response, token)
    logger.info("Session issued for %s", body.email)
    return success_response(message="Session started")


@router.post("/logout")
async def logout(response: Response):
    clear_session_cookie(response)
    return success_response(message="Session cleared")
