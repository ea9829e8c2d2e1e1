from fastapi import Depends, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.flight.models.model_flight import FlightPartnerModel
from partnerhub.api.flight.repositories.repo_flights import FlightRepository
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.core.errors import PartnerError
from partnerhub.database.db_connection import get_db


def get_flight_partner(
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FlightPartnerModel:
    """Companhia aérea do usuário logado."""
    partner = FlightRepository(db).get_partner_by_owner(current_user.id)
    if not partner or not partner.is_active:
        raise PartnerError("NOT_PARTNER", "User is not a flight partner", status.HTTP_404_NOT_FOUND)
    return partner
