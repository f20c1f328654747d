"""
Seat map endpoints: read the map, toggle seats, drop seats from the selection.
"""

from fastapi import APIRouter, Depends

from seat_booking.api.dependencies import get_workflow
from seat_booking.schemas import SessionResponse, build_session_response
from seat_booking.services.booking_workflow import BookingWorkflow

router = APIRouter(prefix="/seats", tags=["Seats"])


@router.get("/", response_model=SessionResponse)
async def get_seat_map(workflow: BookingWorkflow = Depends(get_workflow)):
    """Full seat map with counts, running total and any pending summary."""
    return build_session_response(workflow)


@router.delete("/selection", response_model=SessionResponse)
async def clear_selection_endpoint(workflow: BookingWorkflow = Depends(get_workflow)):
    """Release every selected seat. No-op when nothing is selected."""
    workflow.clear_selection()
    return build_session_response(workflow)


@router.post("/{row}/{col}/toggle", response_model=SessionResponse)
async def toggle_seat_endpoint(
    row: int,
    col: int,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """
    Select an available seat or release a selected one.

    Returns 409 when the per-booking cap is reached or when the selection
    would leave a single available seat stranded between taken seats.
    Booked seats are ignored and reported with outcome "blocked".
    """
    outcome = workflow.toggle_seat(row, col)
    return build_session_response(workflow, outcome=outcome.value)


@router.delete("/{row}/{col}/selection", response_model=SessionResponse)
async def remove_seat_endpoint(
    row: int,
    col: int,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """Release one seat from the selection summary. Other seats are ignored."""
    workflow.remove_seat(row, col)
    return build_session_response(workflow)
