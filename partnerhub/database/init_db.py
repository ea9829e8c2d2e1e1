import logging

from .domain.orchestrator import DatabaseOrchestrator

logger = logging.getLogger(__name__)


def importar_models():
    """
    Importa os inicializadores de cada domínio.

    Cada módulo importa seus models (registrando-os no Base.metadata) e
    registra o próprio inicializador com register_domain. A ordem de criação
    vem do depends_on de cada inicializador.
    """
    from partnerhub.api.accounts.database import initializer as _accounts  # noqa: F401
    from partnerhub.api.shop.database import initializer as _shop  # noqa: F401
    from partnerhub.api.dining.database import initializer as _dining  # noqa: F401
    from partnerhub.api.flight.database import initializer as _flight  # noqa: F401
    from partnerhub.api.activities.database import initializer as _activities  # noqa: F401


def inicializar_banco():
    """Importa os models de todos os domínios e cria as tabelas."""
    importar_models()
    DatabaseOrchestrator().initialize()
