"""FastAPI dependencies for JWT-based route protection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..constants import USER_ROLES
from .auth_utils import decode_access_token

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, as described by its token claims."""

    id: str
    email: str
    name: str
    role: str
    avatar: str = ""

    def as_author(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "avatar": self.avatar or None}


def _actor_from_token(token: str) -> Actor:
    payload = decode_access_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in USER_ROLES:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return Actor(
        id=str(user_id),
        email=payload.get("email") or "",
        name=payload.get("name") or payload.get("email") or "",
        role=role,
        avatar=payload.get("avatar") or "",
    )


def get_current_actor(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> Actor:
    """Extract and validate the JWT from the Authorization header.

    Raises 401 if token is missing, invalid, or expired.
    """
    if creds is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _actor_from_token(creds.credentials)


def get_optional_actor(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> Optional[Actor]:
    """Like ``get_current_actor`` but anonymous callers get None."""
    if creds is None:
        return None
    return _actor_from_token(creds.credentials)


def require_role(*roles: str) -> Callable[..., Actor]:
    """Dependency factory: 403 unless the caller has one of *roles*."""

    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            label = " or ".join(f"{r}s" for r in roles).capitalize()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. {label} only.",
            )
        return actor

    return dependency
