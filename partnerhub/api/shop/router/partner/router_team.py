from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.schemas.schema_team import PartnerMemberOut, TeamInviteIn, TeamMemberUpdate
from partnerhub.api.shop.services.dependencies import PartnerContext, get_partner_context, require_owner
from partnerhub.api.shop.services.service_team import TeamService
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.database.db_connection import get_db

router = APIRouter(prefix="/api/shop/partners/team", tags=["Shop - Equipe"])


def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    return TeamService(db)


@router.get("", response_model=List[PartnerMemberOut])
def listar_equipe(
    ctx: PartnerContext = Depends(get_partner_context),
    svc: TeamService = Depends(get_team_service),
):
    return svc.list(ctx.partner.id)


@router.post("/invite", response_model=PartnerMemberOut, status_code=status.HTTP_201_CREATED)
def convidar_membro(
    body: TeamInviteIn,
    ctx: PartnerContext = Depends(require_owner),
    svc: TeamService = Depends(get_team_service),
):
    return svc.invite(ctx, body)


@router.post("/invitations/{member_id}/accept", response_model=PartnerMemberOut)
def aceitar_convite(
    member_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: TeamService = Depends(get_team_service),
):
    """Aceite do convite pelo próprio usuário convidado."""
    return svc.accept(current_user, member_id)


@router.patch("/{member_id}", response_model=PartnerMemberOut)
def atualizar_membro(
    body: TeamMemberUpdate,
    member_id: int = Path(...),
    ctx: PartnerContext = Depends(require_owner),
    svc: TeamService = Depends(get_team_service),
):
    return svc.update(ctx.partner.id, member_id, body)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def remover_membro(
    member_id: int = Path(...),
    ctx: PartnerContext = Depends(require_owner),
    svc: TeamService = Depends(get_team_service),
):
    svc.remove(ctx.partner.id, member_id)
    return None
