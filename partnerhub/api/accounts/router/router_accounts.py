from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.accounts.repositories.repo_users import UserRepository
from partnerhub.api.accounts.schemas.schema_user import UserResponse, PartnerStatusUpdate
from partnerhub.core.auth_dependencies import get_current_user, require_admin
from partnerhub.database.db_connection import get_db
from partnerhub.utils.logger import logger

router = APIRouter(tags=["auth"], prefix="/api/auth")

router_admin = APIRouter(
    prefix="/api/admin/users",
    tags=["Admin - Usuários"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Retorna o usuário atual baseado no token JWT"
)
def obter_usuario_atual(current_user: UserModel = Depends(get_current_user)):
    """Puxa o usuário já autenticado pelo get_current_user e devolve seus campos."""
    return current_user


@router_admin.patch("/{user_id}/partner-status", response_model=UserResponse)
def atualizar_partner_status(
    user_id: int,
    body: PartnerStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Aprova/rejeita um usuário como parceiro de atividades (endpoint admin)
    """
    user = UserRepository(db).set_partner_status(user_id, body.partner_status)
    logger.info(f"[ADMIN] partner_status do usuário {user_id} -> {body.partner_status.value}")
    return user
