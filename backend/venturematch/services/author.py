"""Display helpers for polymorphic author references.

An idea's ``entrepreneur`` is either a bare identifier (SQL rows, API
clients that only know the id) or an embedded profile mapping (demo
records). Call sites go through :func:`resolve_author` instead of sniffing
the type themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from ..constants import AVATAR_URL_TEMPLATE

ANONYMOUS = "Anonymous"


@dataclass(frozen=True)
class AuthorDisplay:
    id: str
    name: str
    avatar_url: str
    email: str = ""


def default_avatar(seed: str) -> str:
    return AVATAR_URL_TEMPLATE.format(seed=quote(seed or ANONYMOUS))


def resolve_author(ref: Any) -> AuthorDisplay:
    """Produce a display name and avatar for an author reference.

    A plain string is treated as both id and name (matching how the
    listing pages render un-populated references).
    """
    if isinstance(ref, str):
        name = ref or ANONYMOUS
        return AuthorDisplay(id=ref, name=name, avatar_url=default_avatar(name))

    if isinstance(ref, Mapping):
        get = ref.get
    elif ref is not None:
        def get(key, default=None):
            return getattr(ref, key, default)
    else:
        return AuthorDisplay(id="", name=ANONYMOUS, avatar_url=default_avatar(ANONYMOUS))

    raw_id = get("id") or get("_id")
    name = get("name") or ANONYMOUS
    avatar = get("avatar") or default_avatar(name)
    return AuthorDisplay(
        id="" if raw_id is None else str(raw_id),
        name=str(name),
        avatar_url=str(avatar),
        email=str(get("email") or ""),
    )
