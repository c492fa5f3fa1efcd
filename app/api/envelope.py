# app/api/envelope.py
"""
Todas las respuestas comparten la forma {status, message, data, token?},
tanto en éxito como en error.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, AuthError, ValidationError

logger = logging.getLogger(__name__)


def envelope(message: str, data=None, token: str | None = None, status: bool = True) -> dict:
    body = {"status": status, "message": message, "data": data if data is not None else {}}
    if token:
        body["token"] = token
    return body


def _error_response(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(message, data, status=False),
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return _error_response(exc.status_code, exc.message, {"errors": [e.as_dict() for e in exc.errors]})
    if isinstance(exc, AuthError):
        return _error_response(exc.status_code, exc.message, headers={"WWW-Authenticate": "Bearer"})
    if exc.status_code >= 500:
        logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "Invalid request payload")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware vuelve a lanzar la excepción y el servidor registra la traza
    return _error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
