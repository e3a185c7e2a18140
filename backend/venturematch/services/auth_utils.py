"""JWT helpers: the identity interface consumed by the API.

Rules
-----
- NO hardcoded secrets in production: all from environment variables
- Tokens carry the caller's id (``sub``), email, display name and role
- Issuing tokens is the identity service's job; ``create_access_token``
  exists for it and for tests
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

_JWT_SECRET = os.getenv("JWT_SECRET", "venturematch-dev-secret-change-in-production")
_JWT_ALGORITHM = "HS256"
_JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))  # 24h default


def create_access_token(
    user_id: str,
    email: str,
    name: str = "",
    role: str = "entrepreneur",
    avatar: str = "",
) -> str:
    """Create a signed JWT describing one marketplace participant."""
    expire = datetime.utcnow() + timedelta(minutes=_JWT_EXPIRE_MINUTES)
    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "role": role,
        "avatar": avatar,
        "exp": expire,
    }
    return jwt.encode(payload, _JWT_SECRET, algorithm=_JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT. Returns payload dict or None."""
    try:
        return jwt.decode(token, _JWT_SECRET, algorithms=[_JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected access token: %s", exc)
        return None
