from fastapi import Depends

from partnerhub.api.accounts.models.model_user import PartnerStatus, UserModel
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.core.errors import forbidden
from partnerhub.utils.logger import logger


def require_approved_partner(current_user: UserModel = Depends(get_current_user)) -> UserModel:
    """Somente usuários com partner_status aprovado."""
    if current_user.partner_status != PartnerStatus.APPROVED:
        logger.warning(
            f"[ACTIVITIES] Acesso negado user={current_user.id} partner_status={current_user.partner_status.value}"
        )
        raise forbidden("Partner access required")
    return current_user
