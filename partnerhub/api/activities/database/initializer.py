"""
Inicializador do domínio Activities.
"""
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.database.domain.registry import register_domain

# Importar models do domínio
from partnerhub.api.activities.models import (  # noqa: F401
    model_activity,
)


class ActivitiesInitializer(DomainInitializer):
    """Inicializador do domínio Activities (atividades e reservas)."""

    name = "activities"
    table_prefix = "activity_"
    depends_on = ("accounts",)


register_domain(ActivitiesInitializer())
