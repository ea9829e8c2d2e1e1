import os
import tempfile

# Configuração antes de importar a aplicação (settings lê o ambiente no import)
os.environ["RUNNING_IN_DOCKER"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="partnerhub-logs-")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from partnerhub.core.security import create_access_token  # noqa: E402
from partnerhub.database.db_connection import Base, SessionLocal, engine  # noqa: E402
from partnerhub.database.init_db import inicializar_banco  # noqa: E402
from partnerhub.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _database():
    """Banco limpo a cada teste."""
    inicializar_banco()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth_headers(sub: str, email: str | None = None, name: str | None = None) -> dict:
    token = create_access_token({
        "sub": sub,
        "email": email or f"{sub}@example.com",
        "name": name or sub.title(),
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers():
    return auth_headers("owner")


@pytest.fixture
def staff_headers():
    return auth_headers("staff")


@pytest.fixture
def admin_headers():
    return auth_headers("admin", email="admin@example.com")


def whoami(client: TestClient, headers: dict) -> dict:
    """Provisiona o usuário do token e devolve seus dados."""
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()
