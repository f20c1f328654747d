"""
Pricing legend endpoint.
"""

from fastapi import APIRouter, Depends

from seat_booking.api.dependencies import get_workflow
from seat_booking.schemas import TierResponse, build_tier_responses
from seat_booking.services.booking_workflow import BookingWorkflow

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.get("/tiers", response_model=list[TierResponse])
async def list_tiers(workflow: BookingWorkflow = Depends(get_workflow)):
    """Price tiers with the rows each one covers."""
    return build_tier_responses(workflow.pricing, workflow.rows)
