"""
Map domain errors to HTTP responses.

Every error response carries the current session so the client can redraw
the (unchanged) seat map together with the error message.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from seat_booking.api.dependencies import get_workflow
from seat_booking.core.exceptions import SeatBookingError, SeatNotFoundError
from seat_booking.core.logging import get_logger
from seat_booking.schemas import ErrorResponse, build_session_response

logger = get_logger(__name__)


async def seat_booking_error_handler(request: Request, exc: SeatBookingError) -> JSONResponse:
    if isinstance(exc, SeatNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_409_CONFLICT

    logger.info("request_rejected", error=exc.code, detail=exc.message)

    body = ErrorResponse(
        detail=exc.message,
        error=exc.code,
        session=build_session_response(get_workflow(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SeatBookingError, seat_booking_error_handler)
