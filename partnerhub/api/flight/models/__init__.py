from partnerhub.api.accounts.models.model_user import UserModel  # noqa: F401
from partnerhub.api.flight.models.model_flight import (  # noqa: F401
    FlightPartnerModel,
    FlightRouteModel,
    FlightModel,
    PricingRuleModel,
    FlightStatus,
    RouteFrequency,
)
from partnerhub.api.flight.models.model_booking import (  # noqa: F401
    FlightBookingModel,
    BookingEventModel,
    BookingStatus,
)
