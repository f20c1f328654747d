"""
Booking workflow: the single session that owns the seat map.

WORKFLOW
========

    idle --request--> pending_confirmation --confirm--> idle (seats booked)
                                           --cancel---> idle (nothing changes)
    any  --reset----> idle (fresh grid, record erased)

All UI-facing state (grid, phase, pending summary, status and error messages)
lives in one BookingSession value that is replaced, never edited, by each
operation. Every operation starts by clearing both messages; a domain error
replaces the error message and is re-raised with the seats left untouched.

The continuity rule is only checked on selection and on request. Confirming
a booking may leave an isolated available seat; that is not re-validated.
"""

import enum
from contextlib import contextmanager
from typing import Iterator, Optional

from pydantic import BaseModel

from seat_booking.core.config import Settings
from seat_booking.core.exceptions import (
    CapacityExceededError,
    ContinuityViolationError,
    InvalidTransitionError,
    SeatBookingError,
)
from seat_booking.core.logging import get_logger
from seat_booking.core.metrics import (
    record_booking_request,
    record_confirmed,
    record_seat_counts,
    record_toggle,
)
from seat_booking.infrastructure.store import create_store
from seat_booking.models.seat import Grid, apply_booked, booked_seat_ids, create_grid
from seat_booking.services import selection_service
from seat_booking.services.continuity import find_isolated_seat
from seat_booking.services.persistence import BookingRecordStore
from seat_booking.services.pricing import PricingPolicy
from seat_booking.services.selection_service import ToggleOutcome

logger = get_logger(__name__)


class WorkflowPhase(str, enum.Enum):
    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"


class WorkflowAction(str, enum.Enum):
    SELECT = "select"
    REQUEST = "request"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    CLEAR = "clear"
    RESET = "reset"


_TRANSITIONS: dict[tuple[WorkflowPhase, WorkflowAction], WorkflowPhase] = {
    (WorkflowPhase.IDLE, WorkflowAction.SELECT): WorkflowPhase.IDLE,
    (WorkflowPhase.IDLE, WorkflowAction.REQUEST): WorkflowPhase.PENDING_CONFIRMATION,
    (WorkflowPhase.IDLE, WorkflowAction.CLEAR): WorkflowPhase.IDLE,
    (WorkflowPhase.IDLE, WorkflowAction.RESET): WorkflowPhase.IDLE,
    (WorkflowPhase.PENDING_CONFIRMATION, WorkflowAction.CONFIRM): WorkflowPhase.IDLE,
    (WorkflowPhase.PENDING_CONFIRMATION, WorkflowAction.CANCEL): WorkflowPhase.IDLE,
    (WorkflowPhase.PENDING_CONFIRMATION, WorkflowAction.CLEAR): WorkflowPhase.IDLE,
    (WorkflowPhase.PENDING_CONFIRMATION, WorkflowAction.RESET): WorkflowPhase.IDLE,
}


def next_phase(phase: WorkflowPhase, action: WorkflowAction) -> WorkflowPhase:
    """Raises InvalidTransitionError if `action` is not allowed in `phase`."""
    try:
        return _TRANSITIONS[(phase, action)]
    except KeyError:
        raise InvalidTransitionError(phase.value, action.value) from None


class PendingSummary(BaseModel):
    seat_count: int
    total_price: int

    model_config = {"frozen": True}


class BookingSession(BaseModel):
    grid: Grid
    phase: WorkflowPhase = WorkflowPhase.IDLE
    pending: Optional[PendingSummary] = None
    status_message: str = ""
    error_message: str = ""

    model_config = {"frozen": True}


class BookingWorkflow:
    def __init__(
        self,
        record_store: BookingRecordStore,
        pricing: Optional[PricingPolicy] = None,
        rows: int = 8,
        seats_per_row: int = 10,
        max_seats_per_booking: int = 8,
        currency_symbol: str = "₹",
    ):
        self.record_store = record_store
        self.pricing = pricing or PricingPolicy()
        self.rows = rows
        self.seats_per_row = seats_per_row
        self.max_seats = max_seats_per_booking
        self.currency_symbol = currency_symbol
        self._session = BookingSession(grid=create_grid(rows, seats_per_row))

    @classmethod
    def from_settings(cls, settings: Settings) -> "BookingWorkflow":
        return cls(
            record_store=BookingRecordStore(create_store(settings), settings.BOOKED_SEATS_KEY),
            pricing=PricingPolicy.from_settings(settings),
            rows=settings.SEAT_ROWS,
            seats_per_row=settings.SEATS_PER_ROW,
            max_seats_per_booking=settings.MAX_SEATS_PER_BOOKING,
            currency_symbol=settings.CURRENCY_SYMBOL,
        )

    # ---------------------
    # Read side
    # ---------------------

    def snapshot(self) -> BookingSession:
        return self._session

    @property
    def grid(self) -> Grid:
        return self._session.grid

    @property
    def phase(self) -> WorkflowPhase:
        return self._session.phase

    def selected_count(self) -> int:
        return selection_service.selected_count(self.grid)

    def booked_count(self) -> int:
        return selection_service.booked_count(self.grid)

    def available_count(self) -> int:
        return selection_service.available_count(self.grid)

    def total_price(self) -> int:
        return selection_service.total_price(self.grid, self.pricing)

    # ---------------------
    # Session plumbing
    # ---------------------

    def _update(self, **changes) -> None:
        self._session = self._session.model_copy(update=changes)
        if "grid" in changes:
            record_seat_counts(self.selected_count(), self.booked_count())

    @contextmanager
    def _user_action(self) -> Iterator[None]:
        self._update(status_message="", error_message="")
        try:
            yield
        except SeatBookingError as e:
            self._update(error_message=e.message)
            raise

    # ---------------------
    # Operations
    # ---------------------

    def load_persisted(self) -> int:
        """Merge the stored booked set into the grid. Returns booked count."""
        ids = self.record_store.load()
        self._update(grid=apply_booked(self.grid, ids))
        booked = self.booked_count()
        logger.info("booked_seats_restored", booked=booked, stored=len(ids))
        return booked

    def toggle_seat(self, row: int, col: int) -> ToggleOutcome:
        with self._user_action():
            next_phase(self.phase, WorkflowAction.SELECT)
            try:
                grid, outcome = selection_service.toggle_seat(self.grid, row, col, self.max_seats)
            except CapacityExceededError:
                record_toggle("capacity_exceeded")
                raise
            except ContinuityViolationError:
                record_toggle("continuity_violation")
                raise

            record_toggle(outcome.value)
            if grid is not self.grid:
                self._update(grid=grid)
            logger.debug("seat_toggled", row=row, col=col, outcome=outcome.value)
            return outcome

    def remove_seat(self, row: int, col: int) -> None:
        with self._user_action():
            next_phase(self.phase, WorkflowAction.SELECT)
            grid = selection_service.remove_seat(self.grid, row, col)
            if grid is not self.grid:
                self._update(grid=grid)
                logger.debug("seat_removed", row=row, col=col)

    def clear_selection(self) -> None:
        if self.selected_count() == 0:
            return
        with self._user_action():
            phase = next_phase(self.phase, WorkflowAction.CLEAR)
            self._update(
                grid=selection_service.clear_selection(self.grid),
                phase=phase,
                pending=None,
            )
            logger.info("selection_cleared")

    def request_booking(self) -> Optional[PendingSummary]:
        """Build the pending summary. Returns None when nothing is selected."""
        with self._user_action():
            count = self.selected_count()
            if count == 0:
                record_booking_request("empty")
                return None

            phase = next_phase(self.phase, WorkflowAction.REQUEST)

            if count > self.max_seats:
                record_booking_request("rejected")
                raise CapacityExceededError(
                    self.max_seats,
                    f"You can select a maximum of {self.max_seats} seats.",
                )

            isolated = find_isolated_seat(self.grid)
            if isolated is not None:
                record_booking_request("rejected")
                raise ContinuityViolationError(*isolated)

            summary = PendingSummary(seat_count=count, total_price=self.total_price())
            self._update(phase=phase, pending=summary)
            record_booking_request("pending")
            logger.info(
                "booking_requested",
                seats=summary.seat_count,
                total_price=summary.total_price,
            )
            return summary

    def confirm(self) -> PendingSummary:
        """Book every selected seat and persist the full booked set."""
        with self._user_action():
            phase = next_phase(self.phase, WorkflowAction.CONFIRM)
            summary = self._session.pending

            grid = selection_service.commit_selection(self.grid)
            self.record_store.save(booked_seat_ids(grid))

            self._update(
                grid=grid,
                phase=phase,
                pending=None,
                status_message=(
                    f"Successfully booked {summary.seat_count} seat(s) "
                    f"for {self.currency_symbol}{summary.total_price}."
                ),
            )
            record_confirmed(summary.seat_count)
            logger.info(
                "booking_confirmed",
                seats=summary.seat_count,
                total_price=summary.total_price,
                booked_total=self.booked_count(),
            )
            return summary

    def cancel(self) -> None:
        with self._user_action():
            phase = next_phase(self.phase, WorkflowAction.CANCEL)
            self._update(phase=phase, pending=None)
            logger.info("booking_cancelled")

    def reset(self) -> None:
        """Fresh grid of the same size, no pending summary, record erased."""
        with self._user_action():
            phase = next_phase(self.phase, WorkflowAction.RESET)
            self._update(
                grid=create_grid(self.rows, self.seats_per_row),
                phase=phase,
                pending=None,
            )
            self.record_store.clear()
            logger.info("seat_map_reset")
