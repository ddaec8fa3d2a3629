"""
Authentication

Access tokens are issued by the auth service; this module only verifies them
and extracts the user id. Tokens are read from the Authorization header
(Bearer scheme) or the ``access_token`` cookie.
"""

import logging
from typing import Optional

import jwt
from fastapi import Depends, Request

from link_analytics.core.exceptions import AuthenticationRequiredError
from link_analytics.core.setting import settings

logger = logging.getLogger(__name__)


def _extract_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return request.cookies.get("access_token")


def decode_user_id(token: str) -> Optional[int]:
    """
    Verify ``token`` and return the user id it carries.

    The id is taken from the ``id`` claim, falling back to ``sub``.
    Returns None for invalid, expired or id-less tokens.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected access token: {e}")
        return None

    user_id = payload.get("id", payload.get("sub"))
    try:
        return int(user_id) if user_id is not None else None
    except (TypeError, ValueError):
        return None


async def get_current_user_id(request: Request) -> Optional[int]:
    """Dependency: id of the authenticated user, or None."""
    token = _extract_token(request)
    if not token:
        return None
    return decode_user_id(token)


async def require_user_id(user_id: Optional[int] = Depends(get_current_user_id)) -> int:
    """Dependency: id of the authenticated user; raises 401 when absent."""
    if user_id is None:
        raise AuthenticationRequiredError()
    return user_id
