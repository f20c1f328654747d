"""
Pydantic schemas for seat map responses.
"""

from typing import Optional
from pydantic import BaseModel


class SeatResponse(BaseModel):
    id: str
    row: int
    col: int
    label: str
    status: str
    tier: str
    price: int


class TierResponse(BaseModel):
    label: str
    type: str
    price: int
    first_row: int
    last_row: int
    row_labels: list[str]


class PendingSummaryResponse(BaseModel):
    seat_count: int
    total_price: int


class SessionResponse(BaseModel):
    rows: list[list[SeatResponse]]
    selected_seats: list[SeatResponse]
    available_count: int
    selected_count: int
    booked_count: int
    total_price: int
    max_seats_per_booking: int
    phase: str
    pending: Optional[PendingSummaryResponse] = None
    status_message: str = ""
    error_message: str = ""
    outcome: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
    error: str
    session: SessionResponse
