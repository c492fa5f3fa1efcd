# app/core/auth.py
from __future__ import annotations

from fastapi import Header

from app.core.crypto import verify_token
from app.core.errors import MissingToken, MalformedToken

BEARER_PREFIX = "Bearer "


def authorize(raw_header: str | None) -> int:
    """
    Cabecera Authorization -> user_id.
    Función pura: solo depende de la cabecera, la hora actual y el secreto.
    """
    if not raw_header:
        raise MissingToken()

    token = raw_header.removeprefix(BEARER_PREFIX).strip()
    if not token:
        raise MalformedToken()

    # verify_token lanza InvalidOrExpiredToken
    return verify_token(token).user_id


async def current_user_id(authorization: str | None = Header(None)) -> int:
    # Única fuente de identidad del llamante dentro de la petición
    return authorize(authorization)
