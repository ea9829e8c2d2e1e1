"""
Registro dos inicializadores de domínio, ordenados por dependência.
"""
import logging
from typing import Dict, List

from .base import DomainInitializer

logger = logging.getLogger(__name__)

_initializers: Dict[str, DomainInitializer] = {}


def register_domain(initializer: DomainInitializer) -> None:
    if not initializer.name:
        raise ValueError(f"{type(initializer).__name__} sem nome de domínio")
    if initializer.name in _initializers:
        logger.debug(f"[DB] Domínio {initializer.name} já registrado, substituindo")
    _initializers[initializer.name] = initializer


def registered_domains() -> List[str]:
    return list(_initializers)


def resolve_order() -> List[DomainInitializer]:
    """
    Ordena os domínios para que cada um venha depois das suas dependências.
    Levanta RuntimeError para dependência ausente ou ciclo.
    """
    ordered: List[DomainInitializer] = []
    state: Dict[str, str] = {}

    def visit(name: str, required_by: str | None) -> None:
        if state.get(name) == "done":
            return
        if state.get(name) == "visiting":
            raise RuntimeError(f"Ciclo de dependência entre domínios envolvendo '{name}'")
        initializer = _initializers.get(name)
        if initializer is None:
            raise RuntimeError(f"Domínio '{name}' exigido por '{required_by}' não foi registrado")
        state[name] = "visiting"
        for dep in initializer.depends_on:
            visit(dep, name)
        state[name] = "done"
        ordered.append(initializer)

    for name in list(_initializers):
        visit(name, None)
    return ordered
