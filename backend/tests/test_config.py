"""
Tests for settings validation and settings-driven construction.
"""

import pytest
from pydantic import ValidationError

from seat_booking.core.config import Settings
from seat_booking.core.logging import _service_context
from seat_booking.infrastructure.store import InMemoryStore, create_store
from seat_booking.services.booking_workflow import BookingWorkflow


def test_defaults_match_reference_arena():
    settings = Settings(_env_file=None)

    assert (settings.SEAT_ROWS, settings.SEATS_PER_ROW) == (8, 10)
    assert settings.MAX_SEATS_PER_BOOKING == 8
    assert (settings.PREMIUM_PRICE, settings.STANDARD_PRICE, settings.ECONOMY_PRICE) == (1000, 750, 500)
    assert settings.BOOKED_SEATS_KEY == "bookedSeats"


def test_rejects_bounds_beyond_rows():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SEAT_ROWS=4, STANDARD_ROW_BOUND=6)


def test_rejects_unknown_store_backend():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, STORE_BACKEND="sqlite")


def test_store_backend_selection():
    assert create_store(Settings(_env_file=None, STORE_BACKEND="none")) is None
    assert isinstance(create_store(Settings(_env_file=None, STORE_BACKEND="memory")), InMemoryStore)


def test_workflow_from_settings():
    settings = Settings(
        _env_file=None,
        STORE_BACKEND="memory",
        SEAT_ROWS=4,
        SEATS_PER_ROW=6,
        PREMIUM_ROW_BOUND=1,
        STANDARD_ROW_BOUND=2,
        MAX_SEATS_PER_BOOKING=3,
        CURRENCY_SYMBOL="$",
    )
    workflow = BookingWorkflow.from_settings(settings)

    assert workflow.grid.row_count == 4
    assert workflow.grid.seats_per_row == 6
    assert workflow.max_seats == 3
    assert workflow.pricing.price_of_seat(1) == 750
    assert workflow.record_store.available

    workflow.toggle_seat(3, 0)
    workflow.request_booking()
    workflow.confirm()
    assert workflow.snapshot().status_message == "Successfully booked 1 seat(s) for $500."


def test_log_events_carry_service_and_store_backend():
    processor = _service_context("Seat Booking", "memory")

    event = processor(None, "info", {"event": "booking_record_saved"})
    assert event["service"] == "Seat Booking"
    assert event["store_backend"] == "memory"

    bound = processor(None, "info", {"event": "x", "store_backend": "redis"})
    assert bound["store_backend"] == "redis"
