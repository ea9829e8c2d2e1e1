import logging

from .registry import resolve_order

logger = logging.getLogger(__name__)


class DatabaseOrchestrator:
    """Cria as tabelas de todos os domínios registrados."""

    def initialize(self) -> None:
        initializers = resolve_order()
        if not initializers:
            logger.warning("[DB] Nenhum domínio registrado")
            return

        logger.info(f"[DB] Inicializando domínios: {', '.join(i.name for i in initializers)}")
        for initializer in initializers:
            try:
                initializer.initialize()
            except Exception:
                logger.exception(f"[DB] Falha ao inicializar domínio {initializer.name}")
                raise
