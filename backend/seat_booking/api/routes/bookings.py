"""
Booking endpoints: the two-step request/confirm flow and the system reset.
"""

from fastapi import APIRouter, Depends

from seat_booking.api.dependencies import get_workflow
from seat_booking.schemas import SessionResponse, build_session_response
from seat_booking.services.booking_workflow import BookingWorkflow
from seat_booking.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/request", response_model=SessionResponse)
async def request_booking_endpoint(workflow: BookingWorkflow = Depends(get_workflow)):
    """
    Produce the pending summary (seat count and total) for confirmation.
    Does nothing when no seats are selected.
    """
    workflow.request_booking()
    return build_session_response(workflow)


@router.post("/confirm", response_model=SessionResponse)
async def confirm_booking_endpoint(workflow: BookingWorkflow = Depends(get_workflow)):
    """Book the selected seats and persist the booked set."""
    workflow.confirm()
    return build_session_response(workflow)


@router.post("/cancel", response_model=SessionResponse)
async def cancel_booking_endpoint(workflow: BookingWorkflow = Depends(get_workflow)):
    """Drop the pending summary; the selection stays as it was."""
    workflow.cancel()
    return build_session_response(workflow)


@router.post("/reset", response_model=SessionResponse)
async def reset_endpoint(workflow: BookingWorkflow = Depends(get_workflow)):
    """Restore an empty seat map and erase every stored booking."""
    workflow.reset()
    logger.warning("seat_map_reset_requested")
    return build_session_response(workflow)
