from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.activities.schemas.schema_activity import (
    ActivityIn,
    ActivityItemOut,
    ActivityOut,
    ActivityUpdate,
    PartnerStatsOut,
)
from partnerhub.api.activities.services.dependencies import require_approved_partner
from partnerhub.api.activities.services.service_activities import ActivityService
from partnerhub.database.db_connection import get_db

router = APIRouter(
    prefix="/api/partner",
    tags=["Partner - Atividades"],
    dependencies=[Depends(require_approved_partner)],
)


def get_activity_service(db: Session = Depends(get_db)) -> ActivityService:
    return ActivityService(db)


@router.get("/activities", response_model=List[ActivityItemOut])
def listar_atividades(
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    return svc.list(current_user)


@router.post("/activities", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def criar_atividade(
    body: ActivityIn,
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    return svc.create(current_user, body)


@router.get("/activities/{activity_id}", response_model=ActivityOut)
def obter_atividade(
    activity_id: int = Path(...),
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    return svc.get(current_user, activity_id)


@router.patch("/activities/{activity_id}", response_model=ActivityOut)
def atualizar_atividade(
    body: ActivityUpdate,
    activity_id: int = Path(...),
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    return svc.update(current_user, activity_id, body)


@router.delete("/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_atividade(
    activity_id: int = Path(...),
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    svc.delete(current_user, activity_id)
    return None


@router.get("/stats", response_model=PartnerStatsOut, response_model_exclude_none=True)
def estatisticas(
    days: int = Query(7, ge=1, le=365),
    current_user: UserModel = Depends(require_approved_partner),
    svc: ActivityService = Depends(get_activity_service),
):
    return svc.stats(current_user, days)
