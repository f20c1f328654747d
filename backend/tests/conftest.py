"""
Pytest fixtures for the seat map, the booking workflow and the HTTP client.

The workflow is backed by an in-memory key-value store so every test starts
from an empty record and nothing touches Redis.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from seat_booking.infrastructure.store import InMemoryStore, KeyValueStore, StoreUnavailableError
from seat_booking.main import app
from seat_booking.models.seat import Grid, Seat, SeatStatus
from seat_booking.services.booking_workflow import BookingWorkflow
from seat_booking.services.persistence import BookingRecordStore
from seat_booking.services.pricing import PricingPolicy

_STATUS_CODES = {
    ".": SeatStatus.AVAILABLE,
    "S": SeatStatus.SELECTED,
    "B": SeatStatus.BOOKED,
}


class UnreachableStore(KeyValueStore):
    """Store whose every call fails, like Redis being down."""

    def get(self, key):
        raise StoreUnavailableError("connection refused")

    def set(self, key, value):
        raise StoreUnavailableError("connection refused")

    def remove(self, key):
        raise StoreUnavailableError("connection refused")

    def ping(self):
        return False


@pytest.fixture
def make_grid() -> Callable[..., Grid]:
    """
    Build a grid from row strings: "." available, "S" selected, "B" booked.
    Rows not given are filled with available seats up to `rows`.
    """

    def _make(*row_strings: str, rows: int = 8, cols: int = 10) -> Grid:
        seat_rows = []
        for r in range(rows):
            pattern = row_strings[r] if r < len(row_strings) else ""
            pattern = pattern.ljust(cols, ".")
            seat_rows.append(
                tuple(Seat(row=r, col=c, status=_STATUS_CODES[pattern[c]]) for c in range(cols))
            )
        return Grid(seat_rows=tuple(seat_rows))

    return _make


@pytest.fixture
def pricing() -> PricingPolicy:
    return PricingPolicy()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def unreachable_store() -> UnreachableStore:
    return UnreachableStore()


@pytest.fixture
def record_store(store: InMemoryStore) -> BookingRecordStore:
    return BookingRecordStore(store, key="bookedSeats")


@pytest.fixture
def workflow(record_store: BookingRecordStore, pricing: PricingPolicy) -> BookingWorkflow:
    """8x10 seat map, cap 8, default tiers."""
    return BookingWorkflow(record_store=record_store, pricing=pricing)


@pytest_asyncio.fixture(scope="function")
async def client(workflow: BookingWorkflow) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test workflow instead of the startup one."""
    app.state.workflow = workflow

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.workflow
