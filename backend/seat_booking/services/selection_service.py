"""
Selection engine: guarded seat status changes on grid snapshots.

SELECTION STRATEGY: Copy, Validate, Commit
==========================================

Every guarded change is applied to a fresh grid snapshot (grids are frozen),
validated, and only then handed back to the caller. A rejected selection
raises before anything is returned, so the caller keeps its original grid
untouched. Nothing is ever checked in place and rolled back.

Guards on selecting an available seat, in order:
  1. Capacity: the selected count must be below the per-booking cap
  2. Continuity: the resulting grid must not strand a single available seat

Deselecting never needs a re-check: it only adds availability.
"""

import enum

from seat_booking.core.exceptions import CapacityExceededError, ContinuityViolationError
from seat_booking.core.logging import get_logger
from seat_booking.models.seat import Grid, SeatStatus, count_by_status
from seat_booking.services.continuity import find_isolated_seat
from seat_booking.services.pricing import PricingPolicy

logger = get_logger(__name__)


class ToggleOutcome(str, enum.Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    BLOCKED = "blocked"


def toggle_seat(
    grid: Grid,
    row: int,
    col: int,
    max_seats: int,
) -> tuple[Grid, ToggleOutcome]:
    """
    Flip a seat between available and selected.

    Booked seats are left alone (BLOCKED). Raises CapacityExceededError or
    ContinuityViolationError when an available seat cannot be selected.
    """
    target = grid.seat(row, col)

    if target.status == SeatStatus.BOOKED:
        return grid, ToggleOutcome.BLOCKED

    if target.status == SeatStatus.SELECTED:
        return grid.with_status(row, col, SeatStatus.AVAILABLE), ToggleOutcome.DESELECTED

    current = selected_count(grid)
    if current >= max_seats:
        logger.info(
            "seat_selection_rejected",
            seat_id=target.id,
            reason="capacity_exceeded",
            selected=current,
            max_seats=max_seats,
        )
        raise CapacityExceededError(max_seats)

    candidate = grid.with_status(row, col, SeatStatus.SELECTED)
    isolated = find_isolated_seat(candidate)
    if isolated is not None:
        logger.info(
            "seat_selection_rejected",
            seat_id=target.id,
            reason="continuity_violation",
            isolated_row=isolated[0],
            isolated_col=isolated[1],
        )
        raise ContinuityViolationError(*isolated)

    return candidate, ToggleOutcome.SELECTED


def clear_selection(grid: Grid) -> Grid:
    """Every selected seat becomes available. Returns `grid` itself if none are."""
    if selected_count(grid) == 0:
        return grid
    return grid.replace_status(SeatStatus.SELECTED, SeatStatus.AVAILABLE)


def remove_seat(grid: Grid, row: int, col: int) -> Grid:
    """Deselect one seat; anything other than a selected seat is a no-op."""
    if grid.seat(row, col).status != SeatStatus.SELECTED:
        return grid
    return grid.with_status(row, col, SeatStatus.AVAILABLE)


def commit_selection(grid: Grid) -> Grid:
    """Every selected seat becomes booked."""
    return grid.replace_status(SeatStatus.SELECTED, SeatStatus.BOOKED)


def selected_count(grid: Grid) -> int:
    return count_by_status(grid, SeatStatus.SELECTED)


def booked_count(grid: Grid) -> int:
    return count_by_status(grid, SeatStatus.BOOKED)


def available_count(grid: Grid) -> int:
    return count_by_status(grid, SeatStatus.AVAILABLE)


def total_price(grid: Grid, pricing: PricingPolicy) -> int:
    return pricing.total_price(grid)
