# tests/conftest.py
import os
import sys
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# --- Asegurar que podemos importar 'app' desde la raíz del repo ---
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _prepare_test_env() -> None:
    tmp = (ROOT / ".pytest_tmp").absolute()
    tmp.mkdir(exist_ok=True)

    # BD SQLite temporal para pruebas (se recrea en cada sesión)
    db_file = tmp / "test.sqlite3"
    if db_file.exists():
        db_file.unlink()
    os.environ["DB_URL"] = f"sqlite+aiosqlite:///{db_file.as_posix()}"
    os.environ["UPLOAD_DIR"] = (tmp / "uploads").as_posix()

    # Variables mínimas para que Settings funcione sin .env
    os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
    os.environ["JWT_ALG"] = "HS256"
    # Coste mínimo de bcrypt para que los tests vayan rápido
    os.environ["BCRYPT_ROUNDS"] = "4"


# Settings se instancia al importar app.core.config: el entorno debe estar listo antes
_prepare_test_env()


@pytest.fixture(scope="session")
def client():
    """
    Cliente de pruebas con entorno efímero:
    - BD sqlite en .pytest_tmp/test.sqlite3
    - fotos de perfil en .pytest_tmp/uploads
    """
    from app.main import app
    # Con 'with' forzamos lifespan: crea tablas en startup y cierra engine en shutdown
    with TestClient(app) as c:
        yield c


@pytest.fixture
def new_email():
    return f"user-{uuid.uuid4().hex[:10]}@example.com"


@pytest.fixture
def registered(client, new_email):
    """Registra una cuenta nueva y devuelve (email, password, token)."""
    password = "pw123"
    r = client.post("/register", data={"full_name": "Test User", "email": new_email, "password": password})
    assert r.status_code == 200, r.text
    return new_email, password, r.json()["token"]


# --- Reset de settings después de cada test (autouse) ---
@pytest.fixture(autouse=True)
def _reset_settings_between_tests():
    from app.core.config import settings
    snapshot = (settings.profile_pic_required, settings.max_upload_bytes)
    yield
    settings.profile_pic_required, settings.max_upload_bytes = snapshot
