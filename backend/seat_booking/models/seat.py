"""
Seat map value model.

Key design decisions:
- Seats and grids are frozen pydantic models; every status change returns a
  new grid so a rejected selection can never leave a half-applied change
- Tier and price are not stored on the seat; they are derived from the row
- The seat identifier "<row>-<col>" is the persisted form of a booked seat
"""

import enum
from typing import Iterable, Iterator

from pydantic import BaseModel

from seat_booking.core.exceptions import SeatNotFoundError
from seat_booking.core.logging import get_logger

logger = get_logger(__name__)


class SeatStatus(str, enum.Enum):
    AVAILABLE = "available"
    SELECTED = "selected"
    BOOKED = "booked"


def seat_id(row: int, col: int) -> str:
    return f"{row}-{col}"


def parse_seat_id(value: str) -> tuple[int, int]:
    """Parse "<row>-<col>" into zero-based coordinates. Raises ValueError."""
    row_text, sep, col_text = value.partition("-")
    if not sep or not row_text.isdigit() or not col_text.isdigit():
        raise ValueError(f"Malformed seat identifier: {value!r}")
    return int(row_text), int(col_text)


def row_letter(row: int) -> str:
    return chr(ord("A") + row)


class Seat(BaseModel):
    row: int
    col: int
    status: SeatStatus = SeatStatus.AVAILABLE

    model_config = {"frozen": True}

    @property
    def id(self) -> str:
        return seat_id(self.row, self.col)

    @property
    def label(self) -> str:
        """Human seat label, e.g. row 0 col 0 -> "A-1"."""
        return f"{row_letter(self.row)}-{self.col + 1}"

    def with_status(self, status: SeatStatus) -> "Seat":
        return self.model_copy(update={"status": status})


class Grid(BaseModel):
    seat_rows: tuple[tuple[Seat, ...], ...]

    model_config = {"frozen": True}

    @property
    def row_count(self) -> int:
        return len(self.seat_rows)

    @property
    def seats_per_row(self) -> int:
        return len(self.seat_rows[0]) if self.seat_rows else 0

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.seats_per_row

    def seat(self, row: int, col: int) -> Seat:
        if not self.contains(row, col):
            raise SeatNotFoundError(row, col)
        return self.seat_rows[row][col]

    def iter_seats(self) -> Iterator[Seat]:
        """Yield seats in row-major order."""
        for seats in self.seat_rows:
            yield from seats

    def with_status(self, row: int, col: int, status: SeatStatus) -> "Grid":
        """Return a new grid with one seat changed."""
        target = self.seat(row, col)
        seats = list(self.seat_rows[row])
        seats[col] = target.with_status(status)
        seat_rows = list(self.seat_rows)
        seat_rows[row] = tuple(seats)
        return Grid(seat_rows=tuple(seat_rows))

    def replace_status(self, old: SeatStatus, new: SeatStatus) -> "Grid":
        """Return a new grid with every `old` seat moved to `new`."""
        return Grid(
            seat_rows=tuple(
                tuple(s.with_status(new) if s.status == old else s for s in seats)
                for seats in self.seat_rows
            )
        )


def create_grid(rows: int, cols: int) -> Grid:
    """Build an all-available grid with identities (r, c)."""
    return Grid(
        seat_rows=tuple(
            tuple(Seat(row=r, col=c) for c in range(cols))
            for r in range(rows)
        )
    )


def clone_grid(grid: Grid) -> Grid:
    """
    Independent deep copy of a grid.
    The selection engine never needs this since grids are frozen and every
    change builds a new one; it is for callers outside the engine that want
    a copy sharing no seat objects with the original.
    """
    return grid.model_copy(deep=True)


def count_by_status(grid: Grid, status: SeatStatus) -> int:
    return sum(1 for s in grid.iter_seats() if s.status == status)


def seats_with_status(grid: Grid, status: SeatStatus) -> list[Seat]:
    return [s for s in grid.iter_seats() if s.status == status]


def booked_seat_ids(grid: Grid) -> list[str]:
    """Booked seat identifiers in row-major order."""
    return [s.id for s in seats_with_status(grid, SeatStatus.BOOKED)]


def apply_booked(grid: Grid, ids: Iterable[str]) -> Grid:
    """
    Mark every identified seat as booked.
    Identifiers that are malformed or fall outside the grid are skipped.
    """
    wanted: set[tuple[int, int]] = set()
    for value in ids:
        try:
            row, col = parse_seat_id(value)
        except ValueError:
            logger.warning("booked_seat_id_malformed", seat_id=value)
            continue
        if not grid.contains(row, col):
            logger.warning("booked_seat_id_out_of_range", seat_id=value)
            continue
        wanted.add((row, col))

    if not wanted:
        return grid

    return Grid(
        seat_rows=tuple(
            tuple(
                s.with_status(SeatStatus.BOOKED) if (s.row, s.col) in wanted else s
                for s in seats
            )
            for seats in grid.seat_rows
        )
    )
