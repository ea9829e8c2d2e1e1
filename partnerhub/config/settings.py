import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)


def _as_bool(value: str | None, default: str = "false") -> bool:
    return (value if value is not None else default).lower() in ("1", "true", "yes")


def _as_list(value: str | None) -> list[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


# Banco de dados
# DATABASE_URL tem precedência; sem ela, monta a URL do Postgres a partir de DB_*
DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full
DATABASE_URL = os.getenv("DATABASE_URL")

# JWT emitido pelo provedor de identidade externo
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 90))

# Usuários provisionados com esses e-mails entram como admin
ADMIN_EMAILS = [e.lower() for e in _as_list(os.getenv("ADMIN_EMAILS"))]

# CORS
CORS_ORIGINS = _as_list(os.getenv("CORS_ORIGINS"))
CORS_ALLOW_ALL = _as_bool(os.getenv("CORS_ALLOW_ALL"))

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = _as_bool(os.getenv("ENABLE_DOCS"), "true")

# Regionalização
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Ho_Chi_Minh")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "VND")

# Logs
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).resolve().parents[2] / "logs"))
