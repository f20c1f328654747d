"""
Anti-isolation rule for row seating.

An available interior seat (not the first or last seat of its row) must have
at least one available neighbour in the same row. Otherwise it is a single-seat
gap that nobody can book as part of a contiguous block.

The rule is always evaluated over the whole grid, never incrementally.
"""

from typing import Optional

from seat_booking.models.seat import Grid, SeatStatus


def find_isolated_seat(grid: Grid) -> Optional[tuple[int, int]]:
    """Return (row, col) of the first isolated available seat, or None."""
    for row, seats in enumerate(grid.seat_rows):
        for col in range(1, len(seats) - 1):
            if seats[col].status != SeatStatus.AVAILABLE:
                continue
            left_taken = seats[col - 1].status != SeatStatus.AVAILABLE
            right_taken = seats[col + 1].status != SeatStatus.AVAILABLE
            if left_taken and right_taken:
                return row, col
    return None


def is_valid_continuity(grid: Grid) -> bool:
    return find_isolated_seat(grid) is None
