# passengers/pickup_points.py
"""
Pickup points: stops that are handed to the route optimizer.

A point may serve several people. Their names are kept comma-separated in
`name`, and their passenger IDs comma-separated in `person_id`, in the same
order.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from passengers.records import PassengerRecord


class PickupPointError(RuntimeError):
    """Raised when a pickup point is incomplete or invalid."""


@dataclass(frozen=True)
class Person:
    name: str
    person_id: str = ''


@dataclass(frozen=True)
class PickupPoint:
    """A stop where `quantity` passengers are picked up."""

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    quantity: int = 1
    person_id: str | None = None
    grupo: str | None = None

    @property
    def people(self) -> list[Person]:
        return parse_people(self.name, self.person_id)


def _split_csv(text: str | None) -> list[str]:
    return [part.strip() for part in str(text or '').split(',') if part.strip()]


def parse_people(name: str | None, person_id: str | None = None) -> list[Person]:
    """
    Split comma-separated names and IDs into people, pairing them by position.

    Args:
        name: e.g. 'Ana, Luis'.
        person_id: e.g. 'P1, P2'. Missing IDs become ''.

    Returns:
        List of Person (empty if name is blank).
    """
    names = _split_csv(name)
    ids = _split_csv(person_id)
    return [Person(name=n, person_id=ids[i] if i < len(ids) else '') for i, n in enumerate(names)]


def join_people(people: Iterable[Person]) -> tuple[str, str]:
    """
    Inverse of parse_people.

    Returns:
        (names, person_ids): names joined with ', ' and the non-empty IDs joined with ', '.
    """
    people = list(people)
    names = ', '.join(p.name.strip() for p in people if p.name.strip())
    ids = ', '.join(p.person_id.strip() for p in people if p.person_id.strip())
    return names, ids


def parse_quantity(value: object) -> int:
    """
    Parse a passenger count.

    Raises:
        PickupPointError: Unless the value is an integer >= 0.
    """
    text = str(value if value is not None else '').strip()
    try:
        qty = int(text)
    except ValueError as exc:
        raise PickupPointError('Quantity must be a non-negative integer.') from exc
    if qty < 0:
        raise PickupPointError('Quantity must be a non-negative integer.')
    return qty


def parse_coordinate(value: object, label: str, *, limit: float) -> float:
    """
    Parse a latitude or longitude.

    Args:
        value: Number or numeric text.
        label: Field name for error messages.
        limit: Largest allowed absolute value (90 or 180).

    Raises:
        PickupPointError: If the value is missing, not a finite number, or out of range.
    """
    text = str(value if value is not None else '').strip()
    if not text:
        raise PickupPointError(f'{label} is required.')
    try:
        number = float(text)
    except ValueError as exc:
        raise PickupPointError(f'{label} must be a number.') from exc
    if not math.isfinite(number):
        raise PickupPointError(f'{label} must be a finite number.')
    if abs(number) > limit:
        raise PickupPointError(f'{label} must be between -{limit:g} and {limit:g}.')
    return number


def build_pickup_point(
    *,
    name: str = '',
    address: str,
    latitude: object,
    longitude: object,
    quantity: object = 1,
    person_id: str = '',
    grupo: str = '',
    people: Sequence[Person] | None = None,
    point_id: str | None = None,
) -> PickupPoint:
    """
    Validate form input and build a pickup point.

    When `people` is non-empty it wins over `name`/`person_id`.

    Args:
        name: Single name (or comma-separated names).
        address: Address text.
        latitude: Latitude (number or numeric text).
        longitude: Longitude (number or numeric text).
        quantity: Passenger count, integer >= 0.
        person_id: Passenger ID(s).
        grupo: Optional group tag.
        people: Optional explicit list of people at this point.
        point_id: Existing id when editing; a new id is generated otherwise.

    Returns:
        PickupPoint.

    Raises:
        PickupPointError: On missing or invalid fields.
    """
    if people:
        final_name, final_person_id = join_people(people)
    else:
        final_name, final_person_id = str(name or '').strip(), str(person_id or '').strip()

    if not final_name:
        raise PickupPointError('Name is required.')
    if not str(address or '').strip():
        raise PickupPointError('Address is required.')

    lat = parse_coordinate(latitude, 'Latitude', limit=90)
    lng = parse_coordinate(longitude, 'Longitude', limit=180)
    qty = parse_quantity(quantity)

    return PickupPoint(
        id=point_id or uuid.uuid4().hex,
        name=final_name,
        address=str(address).strip(),
        latitude=lat,
        longitude=lng,
        quantity=qty,
        person_id=final_person_id or None,
        grupo=str(grupo or '').strip() or None,
    )


def upsert_pickup_point(points: Sequence[PickupPoint], point: PickupPoint) -> list[PickupPoint]:
    """Replace the point with the same id in place, or append it."""
    updated = list(points)
    for i, existing in enumerate(updated):
        if existing.id == point.id:
            updated[i] = point
            return updated
    updated.append(point)
    return updated


def remove_pickup_point(points: Sequence[PickupPoint], point_id: str) -> list[PickupPoint]:
    return [p for p in points if p.id != point_id]


def filter_pickup_points(points: Sequence[PickupPoint], query: str | None) -> list[PickupPoint]:
    """
    Case-insensitive search in names, address and passenger IDs.

    Args:
        points: Points to search.
        query: Search text; blank returns every point.

    Returns:
        Matching points in their original order.
    """
    q = str(query or '').strip().lower()
    if not q:
        return list(points)

    def matches(p: PickupPoint) -> bool:
        return any(q in str(field or '').lower() for field in (p.name, p.address, p.person_id))

    return [p for p in points if matches(p)]


def pickup_points_from_passengers(passengers: Iterable[PassengerRecord]) -> list[PickupPoint]:
    """One pickup point per geocoded passenger; ungeocoded rows are skipped."""
    return [
        PickupPoint(
            id=p.id or uuid.uuid4().hex,
            name=p.name,
            address=p.address,
            latitude=float(p.latitude),
            longitude=float(p.longitude),
        )
        for p in passengers
        if p.is_geocoded
    ]


def total_quantity(points: Iterable[PickupPoint]) -> int:
    return sum(int(p.quantity) for p in points)
