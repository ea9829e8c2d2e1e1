"""
Handlers globais de exceção registrados no main.
"""
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from partnerhub.core.errors import PartnerError
from partnerhub.utils.logger import logger


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", []) if p != "body"),
            "message": err.get("msg"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]
    logger.info(f"[VALIDATION] {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": errors}),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = getattr(exc, "headers", None)
    if isinstance(exc, PartnerError):
        if exc.status_code >= 500:
            logger.error(f"[PARTNER] {exc.code} em {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder({"error": exc.to_dict()}),
            headers=headers,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERRO] {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal Server Error"}},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Violação de unicidade em inserts concorrentes vira 409."""
    logger.warning(f"[DB] IntegrityError em {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": {"code": "CONFLICT", "message": "Resource already exists or violates a constraint"}},
    )
