"""
Booked-seat record persistence.

RECORD FORMAT
=============

One key (default "bookedSeats") holding a JSON array of seat identifiers:
    ["0-0", "0-1", "7-4"]

Failure handling:
  - Store missing or unreachable -> save/clear are no-ops, load returns []
  - Record absent                -> []
  - Not a list, or empty list    -> [] (record left alone)
  - Non-string entries in a list -> dropped, string entries kept
  - Undecodable value or JSON    -> record erased, []

Parse failures are modelled internally as a ParsedRecord outcome and never
leave this module; callers only ever see a list of identifiers.
"""

import enum
import json
from typing import NamedTuple, Optional

from seat_booking.core.logging import get_logger
from seat_booking.core.metrics import record_persistence_error
from seat_booking.infrastructure.store import (
    KeyValueStore,
    StoreUnavailableError,
    StoreValueCorruptError,
)

logger = get_logger(__name__)

DEFAULT_RECORD_KEY = "bookedSeats"


class ParseOutcome(str, enum.Enum):
    OK = "ok"
    MISSING = "missing"
    WRONG_SHAPE = "wrong_shape"
    CORRUPT = "corrupt"


class ParsedRecord(NamedTuple):
    outcome: ParseOutcome
    seat_ids: list[str]


def parse_record(raw: Optional[str]) -> ParsedRecord:
    if not raw:
        return ParsedRecord(ParseOutcome.MISSING, [])

    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        return ParsedRecord(ParseOutcome.CORRUPT, [])

    if not isinstance(value, list) or not value:
        return ParsedRecord(ParseOutcome.WRONG_SHAPE, [])
    # non-string entries can never name a seat; drop them and keep the rest
    return ParsedRecord(ParseOutcome.OK, [item for item in value if isinstance(item, str)])


class BookingRecordStore:
    """Best-effort adapter between the booked-seat set and a key-value store."""

    def __init__(self, store: Optional[KeyValueStore], key: str = DEFAULT_RECORD_KEY):
        self.store = store
        self.key = key

    @property
    def available(self) -> bool:
        return self.store is not None

    def save(self, seat_ids: list[str]) -> None:
        if self.store is None:
            return
        try:
            self.store.set(self.key, json.dumps(list(seat_ids)))
            logger.info("booking_record_saved", key=self.key, seats=len(seat_ids))
        except StoreUnavailableError as e:
            record_persistence_error("save")
            logger.error("booking_record_save_failed", key=self.key, error=str(e))

    def load(self) -> list[str]:
        if self.store is None:
            return []
        try:
            raw = self.store.get(self.key)
        except StoreUnavailableError as e:
            record_persistence_error("load")
            logger.error("booking_record_load_failed", key=self.key, error=str(e))
            return []
        except StoreValueCorruptError:
            parsed = ParsedRecord(ParseOutcome.CORRUPT, [])
        else:
            parsed = parse_record(raw)

        if parsed.outcome == ParseOutcome.CORRUPT:
            record_persistence_error("corrupt")
            logger.warning("booking_record_corrupt", key=self.key)
            self.clear()
        elif parsed.outcome == ParseOutcome.WRONG_SHAPE:
            logger.warning("booking_record_ignored", key=self.key, reason="wrong_shape")
        elif parsed.outcome == ParseOutcome.OK:
            logger.info("booking_record_loaded", key=self.key, seats=len(parsed.seat_ids))

        return parsed.seat_ids

    def clear(self) -> None:
        if self.store is None:
            return
        try:
            self.store.remove(self.key)
            logger.info("booking_record_cleared", key=self.key)
        except StoreUnavailableError as e:
            record_persistence_error("clear")
            logger.error("booking_record_clear_failed", key=self.key, error=str(e))
