# tests/test_auth_core.py
import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from app.core.auth import authorize
from app.core.config import settings
from app.core.crypto import issue_token, verify_token
from app.core.errors import (
    HashingError,
    InvalidOrExpiredToken,
    MalformedToken,
    MissingToken,
)
from app.core.passwords import hash_password, verify_password


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def _unsigned_token(header: dict, payload: dict) -> str:
    h = _b64url(json.dumps(header).encode())
    p = _b64url(json.dumps(payload).encode())
    return f"{h}.{p}."


def _future_exp() -> int:
    return int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())


# --- Hash de contraseñas ---

def test_hash_and_verify():
    h = hash_password("pw123")
    assert h != "pw123"
    assert verify_password("pw123", h) is True
    assert verify_password("pw124", h) is False


def test_hash_is_salted():
    assert hash_password("same") != hash_password("same")


def test_hash_uses_configured_work_factor():
    assert hash_password("pw").startswith(f"$2b${settings.bcrypt_rounds:02d}$")


def test_verify_malformed_hash_raises():
    with pytest.raises(HashingError):
        verify_password("pw123", "not-a-bcrypt-hash")


# --- Tokens ---

def test_issue_then_verify_roundtrip():
    token = issue_token(42, "a@x.com")
    assert token.count(".") == 2
    claims = verify_token(token)
    assert (claims.user_id, claims.email) == (42, "a@x.com")


def test_token_expires_after_ttl():
    now = datetime.now(timezone.utc)
    header_payload = jwt.decode(issue_token(1, "a@x.com", now=now), options={"verify_signature": False})
    assert header_payload["exp"] == int((now + timedelta(hours=72)).timestamp())

    expired = issue_token(1, "a@x.com", now=now - timedelta(hours=72, seconds=1))
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(expired)


def test_flipped_signature_rejected():
    h, p, sig = issue_token(1, "a@x.com").split(".")
    flipped = f"{h}.{p}.{'B' if sig[0] == 'A' else 'A'}{sig[1:]}"
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(flipped)


def test_other_secret_rejected():
    token = jwt.encode(
        {"user_id": 1, "email": "a@x.com", "exp": _future_exp()},
        "another-secret-0123456789abcdef0123456789",
        algorithm="HS256",
    )
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_alg_none_rejected():
    token = _unsigned_token(
        {"alg": "none", "typ": "JWT"},
        {"user_id": 1, "email": "a@x.com", "exp": _future_exp()},
    )
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_asymmetric_alg_rejected():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    token = jwt.encode({"user_id": 1, "email": "a@x.com", "exp": _future_exp()}, key, algorithm="RS256")
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_token_without_exp_rejected():
    token = jwt.encode({"user_id": 1, "email": "a@x.com"}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_token_with_non_integer_user_id_rejected():
    token = jwt.encode(
        {"user_id": "1", "email": "a@x.com", "exp": _future_exp()}, settings.jwt_secret, algorithm="HS256"
    )
    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


# --- Cabecera Authorization ---

@pytest.mark.parametrize("header", [None, ""])
def test_authorize_missing(header):
    with pytest.raises(MissingToken):
        authorize(header)


@pytest.mark.parametrize("header", ["Bearer ", "Bearer    ", "   "])
def test_authorize_malformed(header):
    with pytest.raises(MalformedToken):
        authorize(header)


def test_authorize_valid():
    token = issue_token(7, "g@x.com")
    assert authorize(f"Bearer {token}") == 7
    assert authorize(f"Bearer   {token}  ") == 7


def test_authorize_prefix_is_case_sensitive():
    token = issue_token(7, "g@x.com")
    with pytest.raises(InvalidOrExpiredToken):
        authorize(f"bearer {token}")


def test_authorize_invalid_token():
    with pytest.raises(InvalidOrExpiredToken):
        authorize("Bearer abc.def.ghi")
