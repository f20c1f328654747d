"""
Domain error taxonomy.

All of these are recoverable: the caller shows the message and the seat map
stays exactly as it was before the attempt.
"""

from typing import Optional


class SeatBookingError(Exception):
    """Base exception for user-facing seat booking errors."""

    code = "seat_booking_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CapacityExceededError(SeatBookingError):
    """Raised when a selection would go over the per-booking seat cap."""

    code = "capacity_exceeded"

    def __init__(self, max_seats: int, message: Optional[str] = None):
        self.max_seats = max_seats
        super().__init__(
            message or f"You can select up to {max_seats} seats per booking."
        )


class ContinuityViolationError(SeatBookingError):
    """Raised when a selection would leave a single available seat stranded."""

    code = "continuity_violation"

    def __init__(self, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        super().__init__(
            "Selection cannot isolate a single available seat between taken seats."
        )


class InvalidTransitionError(SeatBookingError):
    """Raised when a workflow operation is invoked from the wrong phase."""

    code = "invalid_transition"

    def __init__(self, phase: str, action: str):
        self.phase = phase
        self.action = action
        super().__init__(
            f"Illegal booking transition attempted: cannot {action} while {phase}"
        )


class SeatNotFoundError(SeatBookingError):
    """Raised for coordinates outside the seat grid."""

    code = "seat_not_found"

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(f"Seat {row}-{col} does not exist")
