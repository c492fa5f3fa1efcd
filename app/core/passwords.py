# app/core/passwords.py
from __future__ import annotations

from functools import lru_cache

import bcrypt

from app.core.config import settings
from app.core.errors import HashingError

# bcrypt solo usa los primeros 72 bytes
_BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash bcrypt con sal aleatoria embebida; dos llamadas nunca devuelven lo mismo."""
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
        return bcrypt.hashpw(_to_bytes(password), salt).decode("ascii")
    except (ValueError, OSError) as e:
        raise HashingError() from e


def verify_password(password: str, password_hash: str) -> bool:
    """
    True si la contraseña corresponde al hash, False si no.
    Un hash con formato inválido no es un "no coincide": lanza HashingError.
    """
    try:
        return bcrypt.checkpw(_to_bytes(password), password_hash.encode("ascii"))
    except ValueError as e:
        raise HashingError("Stored password hash is malformed") from e


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash fijo contra el que se compara cuando el email no existe."""
    return hash_password("not-a-real-account")
