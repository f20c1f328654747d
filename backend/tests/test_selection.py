"""
Tests for the selection engine: guarded toggles, clears and removals.
"""

import random

import pytest

from seat_booking.core.exceptions import (
    CapacityExceededError,
    ContinuityViolationError,
    SeatNotFoundError,
)
from seat_booking.models.seat import SeatStatus, create_grid
from seat_booking.services import selection_service
from seat_booking.services.continuity import is_valid_continuity
from seat_booking.services.selection_service import ToggleOutcome

MAX_SEATS = 8


# ---------------------
# TOGGLE
# ---------------------

def test_select_three_premium_seats(pricing):
    grid = create_grid(8, 10)
    for col in range(3):
        grid, outcome = selection_service.toggle_seat(grid, 0, col, MAX_SEATS)
        assert outcome == ToggleOutcome.SELECTED

    assert selection_service.selected_count(grid) == 3
    assert selection_service.total_price(grid, pricing) == 3000


def test_toggle_selected_seat_deselects(make_grid):
    grid, outcome = selection_service.toggle_seat(make_grid("SS"), 0, 1, MAX_SEATS)

    assert outcome == ToggleOutcome.DESELECTED
    assert grid.seat(0, 1).status == SeatStatus.AVAILABLE


def test_deselect_is_not_continuity_checked(make_grid):
    # deselecting the middle of S S S leaves S . S; releasing a seat is never blocked
    grid, outcome = selection_service.toggle_seat(make_grid("", "SSS"), 1, 1, MAX_SEATS)

    assert outcome == ToggleOutcome.DESELECTED
    assert grid.seat(1, 1).status == SeatStatus.AVAILABLE


def test_booked_seat_is_blocked(make_grid):
    grid = make_grid("BB")
    result, outcome = selection_service.toggle_seat(grid, 0, 1, MAX_SEATS)

    assert outcome == ToggleOutcome.BLOCKED
    assert result is grid


def test_capacity_exceeded_leaves_grid_unchanged():
    grid = create_grid(8, 10)
    for col in range(MAX_SEATS):
        grid, _ = selection_service.toggle_seat(grid, 0, col, MAX_SEATS)

    with pytest.raises(CapacityExceededError) as exc_info:
        selection_service.toggle_seat(grid, 1, 0, MAX_SEATS)

    assert exc_info.value.max_seats == MAX_SEATS
    assert grid.seat(1, 0).status == SeatStatus.AVAILABLE
    assert selection_service.selected_count(grid) == MAX_SEATS


def test_selection_that_strands_a_seat_is_rejected():
    grid, _ = selection_service.toggle_seat(create_grid(8, 10), 0, 0, MAX_SEATS)

    with pytest.raises(ContinuityViolationError) as exc_info:
        selection_service.toggle_seat(grid, 0, 2, MAX_SEATS)

    assert (exc_info.value.row, exc_info.value.col) == (0, 1)
    assert grid.seat(0, 2).status == SeatStatus.AVAILABLE


def test_existing_gap_blocks_selection_elsewhere(make_grid):
    grid = make_grid("S.S")

    with pytest.raises(ContinuityViolationError):
        selection_service.toggle_seat(grid, 3, 5, MAX_SEATS)

    assert grid.seat(3, 5).status == SeatStatus.AVAILABLE


def test_filling_the_gap_is_allowed(make_grid):
    grid, outcome = selection_service.toggle_seat(make_grid("S.S"), 0, 1, MAX_SEATS)

    assert outcome == ToggleOutcome.SELECTED
    assert is_valid_continuity(grid)


def test_selected_next_to_booked_seat_is_accepted(make_grid):
    # 0-0 selected, 0-2 booked: selecting 0-1 leaves no gap
    grid, outcome = selection_service.toggle_seat(make_grid("S.B"), 0, 1, MAX_SEATS)
    assert outcome == ToggleOutcome.SELECTED


def test_toggle_outside_grid_raises():
    with pytest.raises(SeatNotFoundError):
        selection_service.toggle_seat(create_grid(8, 10), 0, 10, MAX_SEATS)


# ---------------------
# CLEAR / REMOVE / COMMIT
# ---------------------

def test_clear_selection(make_grid):
    grid = selection_service.clear_selection(make_grid("SSB", "", "", "SS"))

    assert selection_service.selected_count(grid) == 0
    assert selection_service.booked_count(grid) == 1


def test_clear_selection_is_idempotent(make_grid):
    once = selection_service.clear_selection(make_grid("SS"))
    twice = selection_service.clear_selection(once)

    assert twice is once


def test_remove_selected_seat(make_grid):
    grid = selection_service.remove_seat(make_grid("SS"), 0, 0)
    assert grid.seat(0, 0).status == SeatStatus.AVAILABLE
    assert grid.seat(0, 1).status == SeatStatus.SELECTED


@pytest.mark.parametrize("col", [0, 5])
def test_remove_non_selected_seat_is_noop(make_grid, col):
    grid = make_grid("B")
    assert selection_service.remove_seat(grid, 0, col) is grid


def test_commit_selection_books_selected_seats(make_grid):
    grid = selection_service.commit_selection(make_grid("SSB"))
    assert selection_service.booked_count(grid) == 3
    assert selection_service.selected_count(grid) == 0


# ---------------------
# INVARIANTS
# ---------------------

@pytest.mark.parametrize("seed", range(20))
def test_random_toggles_keep_invariants(seed, pricing):
    rng = random.Random(seed)
    grid = create_grid(8, 10).with_status(2, 4, SeatStatus.BOOKED)

    for _ in range(200):
        row, col = rng.randrange(8), rng.randrange(10)
        action = rng.random()
        outcome = None
        try:
            if action < 0.8:
                grid, outcome = selection_service.toggle_seat(grid, row, col, MAX_SEATS)
            elif action < 0.95:
                grid = selection_service.remove_seat(grid, row, col)
            else:
                grid = selection_service.clear_selection(grid)
        except (CapacityExceededError, ContinuityViolationError):
            pass

        assert (
            selection_service.available_count(grid)
            + selection_service.selected_count(grid)
            + selection_service.booked_count(grid)
        ) == 80
        assert selection_service.selected_count(grid) <= MAX_SEATS
        if outcome == ToggleOutcome.SELECTED:
            assert is_valid_continuity(grid)
        assert selection_service.total_price(grid, pricing) == sum(
            pricing.price_of_seat(s.row)
            for s in grid.iter_seats()
            if s.status == SeatStatus.SELECTED
        )


def test_price_is_independent_of_selection_order(pricing):
    seats = [(0, 0), (0, 1), (4, 8), (4, 9), (7, 3), (7, 4)]
    totals = set()
    for order in (seats, list(reversed(seats)), seats[2:] + seats[:2]):
        grid = create_grid(8, 10)
        for row, col in order:
            grid, _ = selection_service.toggle_seat(grid, row, col, MAX_SEATS)
        totals.add(selection_service.total_price(grid, pricing))

    assert totals == {2 * 1000 + 2 * 750 + 2 * 500}
