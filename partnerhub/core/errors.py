# partnerhub/core/errors.py
from typing import Any, Optional

from fastapi import HTTPException, status

from partnerhub.utils.prometheus_metrics import record_transition


class PartnerError(HTTPException):
    """
    Erro de domínio com código estável para o front.

    É um HTTPException: pode ser levantado de repositórios/services e o
    handler global renderiza {"error": {"code", "message", "details"}}.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Any] = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


def not_found(message: str) -> PartnerError:
    return PartnerError("NOT_FOUND", message, status.HTTP_404_NOT_FOUND)


def forbidden(message: str) -> PartnerError:
    return PartnerError("FORBIDDEN", message, status.HTTP_403_FORBIDDEN)


def conflict(message: str, code: str = "CONFLICT") -> PartnerError:
    return PartnerError(code, message, status.HTTP_409_CONFLICT)


def validation_error(message: str, details: Optional[Any] = None) -> PartnerError:
    return PartnerError("VALIDATION_ERROR", message, status.HTTP_400_BAD_REQUEST, details)


def invalid_transition(current: str, target: str) -> PartnerError:
    return PartnerError(
        "INVALID_TRANSITION",
        f"Cannot change status from '{current}' to '{target}'",
        status.HTTP_400_BAD_REQUEST,
    )


def check_transition(
    transitions: dict[str, list[str]], current: str, target: str, domain: str = "generic"
) -> None:
    """Valida uma transição de status contra o mapa permitido e contabiliza o resultado."""
    allowed = target in transitions.get(current, [])
    record_transition(domain, current, target, allowed)
    if not allowed:
        raise invalid_transition(current, target)
