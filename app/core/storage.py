# app/core/storage.py
from __future__ import annotations

import re
import time
import uuid
from pathlib import Path

from app.core.config import settings
from app.core.errors import UploadError

UPLOADS_URL_PREFIX = "/uploads"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def stored_name(filename: str, now: float | None = None) -> str:
    """
    <unix>-<aleatorio>-<basename>; se descarta cualquier ruta que venga del cliente.
    El sufijo aleatorio evita que dos subidas en el mismo segundo con el mismo
    nombre se pisen.
    """
    base = Path(_CONTROL_CHARS.sub("", filename).replace("\\", "/")).name
    if base in ("", ".", ".."):
        base = "upload"
    unix = int(now if now is not None else time.time())
    return f"{unix}-{uuid.uuid4().hex[:8]}-{base}"


def save_upload(name: str, data: bytes) -> Path:
    target = Path(settings.upload_dir) / name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        # "xb": nunca sobrescribir la foto de otra cuenta
        with open(target, "xb") as f:
            f.write(data)
    except (OSError, ValueError) as e:
        raise UploadError() from e
    return target


def public_url(name: str | None) -> str | None:
    if not name:
        return None
    return f"{UPLOADS_URL_PREFIX}/{name}"
