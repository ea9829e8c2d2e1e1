"""
Inicializador do domínio Flight.
"""
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.database.domain.registry import register_domain

# Importar models do domínio
from partnerhub.api.flight.models import (  # noqa: F401
    model_booking,
    model_flight,
)


class FlightInitializer(DomainInitializer):
    """Inicializador do domínio Flight (companhias, voos, rotas, preços e reservas)."""

    name = "flight"
    table_prefix = "flight_"
    depends_on = ("accounts",)


register_domain(FlightInitializer())
