# app/api/requests.py
"""
Una variante de petición por intención (registro / login), cada una con su
validador. Se comprueban todos los campos y se devuelven todos los errores juntos.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.core.config import settings
from app.core.errors import FieldError, ValidationError


def _required(value: str | None, field: str, label: str) -> FieldError | None:
    if not value:
        return FieldError(field, f"{label} is mandatory")
    return None


class _Validated:
    def errors(self) -> list[FieldError]:
        raise NotImplementedError

    def raise_if_invalid(self) -> None:
        errors = self.errors()
        if errors:
            raise ValidationError(errors)


@dataclass
class RegisterRequest(_Validated):
    full_name: str
    email: str
    password: str
    profile_pic_name: str | None = None
    profile_pic_data: bytes | None = None

    def errors(self) -> list[FieldError]:
        checks = [
            _required(self.full_name, "full_name", "Full name"),
            _required(self.email, "email", "Email"),
            _required(self.password, "password", "Password"),
        ]
        if self.profile_pic_data is None:
            if settings.profile_pic_required:
                checks.append(FieldError("profile_pic", "Profile picture is mandatory"))
        elif len(self.profile_pic_data) > settings.max_upload_bytes:
            checks.append(FieldError("profile_pic", "Profile picture is too large"))
        return [c for c in checks if c is not None]


@dataclass
class LoginRequest(_Validated):
    email: str
    password: str

    def errors(self) -> list[FieldError]:
        checks = [
            _required(self.email, "email", "Email"),
            _required(self.password, "password", "Password"),
        ]
        return [c for c in checks if c is not None]
