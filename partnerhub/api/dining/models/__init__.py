from partnerhub.api.accounts.models.model_user import UserModel  # noqa: F401
from partnerhub.api.dining.models.model_venue import (  # noqa: F401
    VenueModel,
    MenuItemModel,
    TableModel,
)
from partnerhub.api.dining.models.model_reservation import (  # noqa: F401
    ReservationModel,
    ReservationStatus,
    KitchenTicketModel,
    KitchenStatus,
)
