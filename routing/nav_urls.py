# routing/nav_urls.py

import urllib.parse
from collections.abc import Sequence

from passengers.pickup_points import PickupPoint


def point_location(point: PickupPoint) -> str:
    """'lat,lng' string, which Google Maps accepts wherever it accepts an address."""
    return f'{float(point.latitude):.6f},{float(point.longitude):.6f}'


def build_google_maps_url(stops: Sequence[str]) -> str:
    """
    Build a Google Maps directions URL with optional waypoints.

    Args:
        stops: Ordered stops (addresses or 'lat,lng' strings).

    Returns:
        URL string.

    Raises:
        ValueError: With fewer than two stops.
    """
    if len(stops) < 2:
        raise ValueError('At least origin and destination are required.')

    origin = urllib.parse.quote(stops[0])
    destination = urllib.parse.quote(stops[-1])
    intermediates = stops[1:-1]

    url = f'https://www.google.com/maps/dir/?api=1&origin={origin}&destination={destination}'
    if intermediates:
        waypoints = '|'.join(urllib.parse.quote(s) for s in intermediates)
        url += f'&waypoints={waypoints}'

    return url


def build_route_url(stop_ids: Sequence[str], points_by_id: dict[str, PickupPoint]) -> str | None:
    """
    Directions URL for a vehicle route, or None if it visits fewer than two known points.
    """
    stops = [point_location(points_by_id[s]) for s in stop_ids if s in points_by_id]
    if len(stops) < 2:
        return None
    return build_google_maps_url(stops)
