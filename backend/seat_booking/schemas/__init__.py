from seat_booking.schemas.seat import (
    ErrorResponse,
    PendingSummaryResponse,
    SeatResponse,
    SessionResponse,
    TierResponse,
)
from seat_booking.schemas.builders import build_session_response, build_tier_responses

__all__ = [
    "SeatResponse", "TierResponse", "PendingSummaryResponse",
    "SessionResponse", "ErrorResponse",
    "build_session_response", "build_tier_responses",
]
