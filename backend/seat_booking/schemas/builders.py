"""
Build response schemas from workflow state so the renderer never has to
re-derive tiers, prices or counts.
"""

from typing import Optional

from seat_booking.models.seat import Seat, SeatStatus, row_letter
from seat_booking.schemas.seat import (
    PendingSummaryResponse,
    SeatResponse,
    SessionResponse,
    TierResponse,
)
from seat_booking.services.booking_workflow import BookingWorkflow
from seat_booking.services.pricing import PricingPolicy


def _seat_response(seat: Seat, pricing: PricingPolicy) -> SeatResponse:
    tier = pricing.tier_of(seat.row)
    return SeatResponse(
        id=seat.id,
        row=seat.row,
        col=seat.col,
        label=seat.label,
        status=seat.status.value,
        tier=tier.type,
        price=tier.price,
    )


def build_session_response(
    workflow: BookingWorkflow,
    outcome: Optional[str] = None,
) -> SessionResponse:
    session = workflow.snapshot()
    pricing = workflow.pricing

    rows = [
        [_seat_response(seat, pricing) for seat in seats]
        for seats in session.grid.seat_rows
    ]
    selected = [seat for row in rows for seat in row if seat.status == SeatStatus.SELECTED.value]

    pending = None
    if session.pending is not None:
        pending = PendingSummaryResponse(
            seat_count=session.pending.seat_count,
            total_price=session.pending.total_price,
        )

    return SessionResponse(
        rows=rows,
        selected_seats=selected,
        available_count=workflow.available_count(),
        selected_count=len(selected),
        booked_count=workflow.booked_count(),
        total_price=workflow.total_price(),
        max_seats_per_booking=workflow.max_seats,
        phase=session.phase.value,
        pending=pending,
        status_message=session.status_message,
        error_message=session.error_message,
        outcome=outcome,
    )


def build_tier_responses(pricing: PricingPolicy, total_rows: int) -> list[TierResponse]:
    return [
        TierResponse(
            label=tier.label,
            type=tier.type,
            price=tier.price,
            first_row=tier.first_row,
            last_row=tier.last_row,
            row_labels=[row_letter(r) for r in range(tier.first_row, tier.last_row + 1)],
        )
        for tier in pricing.tiers(total_rows)
    ]
