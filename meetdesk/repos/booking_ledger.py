"""Append-only record of accepted bookings.

The ledger is the read model the client renders from: bookings come back
in exactly the order they were accepted. There is no update
or removal operation.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from meetdesk.models.booking import Booking


class BookingLedger(Protocol):
    def append(self, booking: Booking) -> None: ...
    def list_all(self) -> Iterator[Booking]: ...
    def get(self, booking_id: str) -> Booking | None: ...
    def __len__(self) -> int: ...


class InMemoryBookingLedger:
    def __init__(self) -> None:
        self._entries: list[Booking] = []

    def append(self, booking: Booking) -> None:
        # No duplicate-id check: provider and local ids share no namespace.
        self._entries.append(booking)

    def list_all(self) -> Iterator[Booking]:
        # A fresh generator per call, so listings can be restarted.
        # Bookings appended mid-iteration are not visible to that iteration.
        snapshot = tuple(self._entries)
        return (b for b in snapshot)

    def get(self, booking_id: str) -> Booking | None:
        for b in self._entries:
            if b.id == booking_id:
                return b
        return None

    def __len__(self) -> int:
        return len(self._entries)
