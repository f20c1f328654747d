"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from seat_booking.api.routes import seats, bookings, pricing

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(seats.router)
api_router.include_router(bookings.router)
api_router.include_router(pricing.router)
