"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Selection metrics
seat_toggles = Counter(
    'seat_toggles_total',
    'Seat toggle attempts',
    ['outcome']  # selected, deselected, blocked, capacity_exceeded, continuity_violation
)

# Booking workflow metrics
booking_requests = Counter(
    'booking_requests_total',
    'Booking summary requests',
    ['result']  # pending, empty, rejected
)

bookings_confirmed = Counter(
    'bookings_confirmed_total',
    'Bookings confirmed and committed'
)

seats_booked = Counter(
    'seats_booked_total',
    'Seats moved to booked by confirmed bookings'
)

# Persistence metrics
persistence_errors = Counter(
    'booking_record_errors_total',
    'Booked-seat record failures handled by the persistence adapter',
    ['operation']  # load, save, clear, corrupt
)

# Seat map state
selected_seats = Gauge(
    'seat_map_selected_seats',
    'Seats currently selected'
)

booked_seats = Gauge(
    'seat_map_booked_seats',
    'Seats currently booked'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )

# Convenience functions for instrumentation
def record_toggle(outcome: str):
    """Record a toggle attempt by outcome."""
    seat_toggles.labels(outcome=outcome).inc()

def record_booking_request(result: str):
    """Record booking request. Result: pending, empty, rejected"""
    booking_requests.labels(result=result).inc()

def record_confirmed(seat_count: int):
    bookings_confirmed.inc()
    seats_booked.inc(seat_count)

def record_persistence_error(operation: str):
    """Record persistence failure. Operation: load, save, clear, corrupt"""
    persistence_errors.labels(operation=operation).inc()

def record_seat_counts(selected: int, booked: int):
    selected_seats.set(selected)
    booked_seats.set(booked)
