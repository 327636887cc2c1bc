# passengers/pipeline.py
"""
Sequential geocoding of passenger records.

Every record is independent: a failed or skipped record is kept unchanged, so
the output always has the same length and order as the input.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Sequence

from passengers.pacing import FixedPacer
from passengers.records import PassengerRecord

GeocodeFn = Callable[[str, str], tuple[float, float] | None]
ProgressFn = Callable[[int, int], None]


def geocode_passengers(
    passengers: Sequence[PassengerRecord],
    *,
    geocode: GeocodeFn,
    pacer: FixedPacer | None = None,
    progress_callback: ProgressFn | None = None,
) -> list[PassengerRecord]:
    """
    Geocode passengers in order, one at a time.

    Args:
        passengers: Records to geocode.
        geocode: Callable (address, city) -> (lat, lng) or None. It is expected
            to clean the address and to swallow its own failures.
        pacer: Pacing policy; a default FixedPacer if None.
        progress_callback: Optional callback(current, total) after each record.

    Returns:
        New list of records, same length and order as `passengers`.
    """
    if pacer is None:
        pacer = FixedPacer()

    total = len(passengers)
    updated: list[PassengerRecord] = []

    for i, passenger in enumerate(passengers):
        if not passenger.has_address:
            updated.append(dataclasses.replace(passenger))
        else:
            pacer.wait(i)
            location = geocode(passenger.address, passenger.city or '')
            if location is None:
                updated.append(dataclasses.replace(passenger))
            else:
                lat, lng = location
                updated.append(dataclasses.replace(passenger, latitude=float(lat), longitude=float(lng)))

        if progress_callback is not None:
            progress_callback(i + 1, total)

    logging.info(
        'Geocoding completed: %d of %d addresses geocoded',
        count_geocoded(updated),
        total,
    )
    return updated


def count_geocoded(passengers: Sequence[PassengerRecord]) -> int:
    """Number of records that carry both coordinates."""
    return sum(1 for p in passengers if p.is_geocoded)
