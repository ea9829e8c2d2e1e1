"""
Inicializador do domínio Dining.
"""
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.database.domain.registry import register_domain

# Importar models do domínio
from partnerhub.api.dining.models import (  # noqa: F401
    model_reservation,
    model_venue,
)


class DiningInitializer(DomainInitializer):
    """Inicializador do domínio Dining (restaurantes, reservas, cozinha)."""

    name = "dining"
    table_prefix = "dining_"
    depends_on = ("accounts",)


register_domain(DiningInitializer())
