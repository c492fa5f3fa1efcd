# app/core/errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Error de dominio: lleva el código HTTP y el mensaje visible para el cliente."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(", ".join(f"{e.field}: {e.message}" for e in self.errors))


class DuplicateEmail(AppError):
    status_code = 409
    message = "Email ID already exists"


class InvalidCredentials(AppError):
    # Mismo mensaje para email inexistente y contraseña incorrecta
    status_code = 401
    message = "Invalid email or password"


class AuthError(AppError):
    status_code = 401
    message = "Unauthorized"


class MissingToken(AuthError):
    message = "Missing authorization token"


class MalformedToken(AuthError):
    message = "Invalid token format"


class InvalidOrExpiredToken(AuthError):
    message = "Invalid or expired token"


class HashingError(AppError):
    message = "Failed to hash password"


class SigningError(AppError):
    message = "Failed to generate token, please try again"


class UploadError(AppError):
    message = "Failed to save profile picture"


class NotFound(AppError):
    status_code = 404
    message = "Not found"
