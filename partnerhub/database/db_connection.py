# partnerhub/database/db_connection.py

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from ..config.settings import DB_CONFIG, DB_SSL_MODE, DATABASE_URL

# Base única para todos os models
Base = declarative_base()

logger = logging.getLogger(__name__)


def _build_connection_string() -> str:
    if DATABASE_URL:
        return DATABASE_URL

    if not any(DB_CONFIG.get(k) for k in ('database', 'user', 'host')):
        logger.warning("DATABASE_URL e DB_* ausentes, usando SQLite local (partnerhub.db)")
        return "sqlite:///./partnerhub.db"

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(
            f"Configuração do banco inválida, defina DATABASE_URL ou as variáveis: {', '.join(missing)}"
        )

    # Monta a URL de conexão (com SSL opcional via query)
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def _build_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # Banco em memória precisa de uma única conexão compartilhada
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


connection_string = _build_connection_string()
engine = _build_engine(connection_string)

# Configura o sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
