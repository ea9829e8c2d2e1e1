"""
Schemas compartilhados entre as verticais.
"""
from datetime import datetime
from typing import Annotated, Generic, List, TypeVar

from pydantic import AfterValidator, BaseModel, field_validator

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.utils.database_utils import to_local_naive

T = TypeVar("T")

# Colunas guardam horário local sem tzinfo; "...Z"/"+00:00" é convertido
LocalDateTime = Annotated[datetime, AfterValidator(to_local_naive)]


def reject_null(*fields: str):
    """
    Validator para schemas de PATCH: campo omitido fica como está,
    mas null explícito em coluna obrigatória vira 422 no próprio campo.
    """

    def _not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    return field_validator(*fields)(_not_null)


class Money(BaseModel):
    amount: float
    currency: str = DEFAULT_CURRENCY


def money(amount, currency: str = DEFAULT_CURRENCY) -> Money:
    return Money(amount=float(amount or 0), currency=currency)


class Page(BaseModel, Generic[T]):
    """Resposta paginada padrão: {"data": [...], "total": N}."""
    data: List[T]
    total: int
