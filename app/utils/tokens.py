# app/utils/tokens.py
"""
Identity token service.

issue_token()  → signed HS256 JWT carrying {"id": <user id>}, valid JWT_EXPIRES_HOURS.
verify_token() → (True, user_id) or (False, None). Never raises.

There is no refresh token or revocation list: a token stays valid until it
expires, and "renew" just issues a new one for the already-authenticated id.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt

from app.config import settings

ALGORITHM = "HS256"


class TokenError(Exception):
    """Token could not be issued (misconfiguration)."""


def issue_token(user_id: int, expires_in: Optional[timedelta] = None) -> str:
    if not settings.JWT_KEY:
        raise TokenError("JWT_KEY no está configurada")

    now = datetime.now(timezone.utc)
    expire = now + (expires_in if expires_in is not None else timedelta(hours=settings.JWT_EXPIRES_HOURS))
    payload = {"id": user_id, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.JWT_KEY, algorithm=ALGORITHM)


def verify_token(token: Optional[str]) -> Tuple[bool, Optional[int]]:
    # No key configured fails closed
    if not token or not settings.JWT_KEY:
        return False, None
    try:
        payload = jwt.decode(token, settings.JWT_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return False, None

    user_id = payload.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
        return False, None
    return True, user_id
