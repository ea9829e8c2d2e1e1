"""
Inicializador do domínio Accounts.
"""
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.database.domain.registry import register_domain

# Importar models do domínio
from partnerhub.api.accounts.models.model_user import UserModel  # noqa: F401


class AccountsInitializer(DomainInitializer):
    """Inicializador do domínio Accounts."""

    name = "accounts"
    table_prefix = "accounts_"


register_domain(AccountsInitializer())
