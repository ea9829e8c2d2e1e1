from partnerhub.api.accounts.models.model_user import UserModel  # noqa: F401
from partnerhub.api.activities.models.model_activity import (  # noqa: F401
    ActivityModel,
    ActivityBookingModel,
    ActivityBookingStatus,
)
