from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy.exc import IntegrityError

from partnerhub.config.settings import BASE_URL, CORS_ALLOW_ALL, CORS_ORIGINS, ENABLE_DOCS
from partnerhub.core.exception_handlers import (
    general_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    validation_exception_handler,
)
from partnerhub.utils.logger import logger
from partnerhub.utils.prometheus_metrics import PrometheusMiddleware

from partnerhub.api.accounts.router.router_accounts import router as accounts_router, router_admin as users_admin_router
from partnerhub.api.shop.router.router import api_shop
from partnerhub.api.dining.router.router_restaurant import router as dining_router
from partnerhub.api.flight.router.router_flight import router as flight_router
from partnerhub.api.activities.router.router_activities import router as activities_router
from partnerhub.api.monitoring.router import router as monitoring_router, router_public as monitoring_router_public

# Rotas que dispensam token no Swagger
PUBLIC_PATHS = ("/", "/health", "/api/monitoring/metrics")
PUBLIC_PREFIXES = ("/api/shop/partners/public",)

ROUTERS = (
    monitoring_router_public,
    monitoring_router,
    accounts_router,
    users_admin_router,
    api_shop,
    dining_router,
    flight_router,
    activities_router,
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    from partnerhub.database.init_db import inicializar_banco

    logger.info("[APP] Criando tabelas dos domínios...")
    inicializar_banco()
    logger.info("[APP] PartnerHub no ar")
    yield
    logger.info("[APP] PartnerHub encerrado")


def _docs(path: str):
    return path if ENABLE_DOCS else None


app = FastAPI(
    title="PartnerHub API",
    version="1.0.0",
    description="Portal de parceiros: loja, restaurantes, companhias aéreas e atividades",
    docs_url=_docs("/swagger"),
    redoc_url=_docs("/redoc"),
    openapi_url=_docs("/openapi.json"),
    servers=[{"url": BASE_URL, "description": "Base URL do ambiente"}] if BASE_URL else None,
    redirect_slashes=False,
    lifespan=lifespan,
)

for exc_class, handler in (
    (RequestValidationError, validation_exception_handler),
    (HTTPException, http_exception_handler),
    (IntegrityError, integrity_error_handler),
    (Exception, general_exception_handler),
):
    app.add_exception_handler(exc_class, handler)


def _cors_options() -> dict:
    # Credenciais só quando há origens explícitas; "*" não pode levar cookies
    if CORS_ALLOW_ALL or not CORS_ORIGINS:
        return {"allow_origins": ["*"], "allow_credentials": False}
    return {"allow_origins": CORS_ORIGINS, "allow_credentials": True}


# O último middleware adicionado é o primeiro a rodar
app.add_middleware(PrometheusMiddleware)
app.add_middleware(CORSMiddleware, allow_methods=["*"], allow_headers=["*"], **_cors_options())


@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


for api_router in ROUTERS:
    app.include_router(api_router)


def _is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def partnerhub_openapi() -> dict:
    """Schema OpenAPI com Bearer JWT global, exceto nas rotas públicas."""
    if app.openapi_schema is None:
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
            servers=app.servers,
        )
        schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        schema["security"] = [{"bearerAuth": []}]
        for path, operations in schema.get("paths", {}).items():
            if _is_public(path):
                for operation in operations.values():
                    operation["security"] = []
        app.openapi_schema = schema
    return app.openapi_schema


app.openapi = partnerhub_openapi
