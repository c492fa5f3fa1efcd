# app/core/crypto.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from jwt import InvalidTokenError

from app.core.config import settings, HMAC_ALGORITHMS
from app.core.errors import InvalidOrExpiredToken, SigningError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    expires_at: datetime


def issue_token(user_id: int, email: str, now: datetime | None = None) -> str:
    """Firma {user_id, email, exp} con el secreto del proceso (HMAC)."""
    now = now or datetime.now(timezone.utc)
    exp = int((now + timedelta(hours=settings.token_ttl_hours)).timestamp())
    payload = {"user_id": user_id, "email": email, "exp": exp}
    try:
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise SigningError() from e


def verify_token(token: str) -> TokenClaims:
    """
    Verifica firma, algoritmo y caducidad.
    - Solo se aceptan cabeceras HMAC (fuera "none" y algoritmos asimétricos)
    - exp <= ahora se rechaza
    Cualquier fallo es el mismo InvalidOrExpiredToken, sin detalle.
    """
    try:
        data = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=list(HMAC_ALGORITHMS),
            options={"require": ["exp"]},
        )
    except InvalidTokenError as e:
        logger.debug("token rejected: %s", type(e).__name__)
        raise InvalidOrExpiredToken() from e

    user_id = data.get("user_id")
    email = data.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        logger.debug("token rejected: unexpected claim shape")
        raise InvalidOrExpiredToken()

    return TokenClaims(
        user_id=user_id,
        email=email,
        expires_at=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
    )
