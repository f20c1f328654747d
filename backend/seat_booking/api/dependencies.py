"""
Shared route dependencies.
"""

from fastapi import Request

from seat_booking.services.booking_workflow import BookingWorkflow


def get_workflow(request: Request) -> BookingWorkflow:
    """The process-wide booking workflow created at startup."""
    return request.app.state.workflow
