"""Passenger record type shared by ingest, geocoding and export."""

from __future__ import annotations

from dataclasses import dataclass

REQUIRED_COLUMNS: tuple[str, ...] = ('id', 'name', 'address', 'city')
EXPORT_COLUMNS: tuple[str, ...] = REQUIRED_COLUMNS + ('latitude', 'longitude')


@dataclass(frozen=True)
class PassengerRecord:
    """One imported passenger row, optionally annotated with coordinates."""

    id: str
    name: str
    address: str
    city: str
    latitude: float | None = None
    longitude: float | None = None

    @property
    def is_geocoded(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def has_address(self) -> bool:
        return bool(self.address and self.address.strip())
