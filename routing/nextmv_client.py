# routing/nextmv_client.py
"""
Nextmv Cloud client.

Route optimization is delegated entirely to Nextmv. This module only:
- builds the routing input from pickup points and vehicles,
- submits a run and fetches it back,
- parses the returned vehicle routes.

The client talks either to the Nextmv proxy (which injects the API key) or
directly to the Nextmv API with a bearer key.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import requests

from passengers.pickup_points import PickupPoint
from planner.config import NEXTMV_TIMEOUT_S

RUN_DONE_STATUSES: frozenset[str] = frozenset({'succeeded', 'failed', 'canceled'})


class NextmvError(RuntimeError):
    """Raised when a Nextmv request fails or returns an unexpected payload."""


@dataclass(frozen=True)
class Vehicle:
    id: str
    capacity: int
    start_latitude: float
    start_longitude: float
    grupo: str | None = None


@dataclass(frozen=True)
class VehicleRoute:
    vehicle_id: str
    stop_ids: list[str] = field(default_factory=list)
    route_travel_duration: float | None = None
    route_travel_distance: float | None = None


def _compatibility(grupo: str | None) -> list[str] | None:
    tag = str(grupo or '').strip()
    return [tag] if tag else None


def build_routing_input(
    points: Sequence[PickupPoint],
    vehicles: Sequence[Vehicle],
) -> dict[str, object]:
    """
    Build a Nextmv routing input.

    Each pickup point becomes a stop with a negative quantity (passengers board).
    A grupo tag becomes a compatibility attribute on both sides, so a tagged stop
    can only be served by a vehicle with the same tag.

    Args:
        points: Pickup points.
        vehicles: Available vehicles.

    Returns:
        JSON-serializable routing input.

    Raises:
        NextmvError: If there are no points or no vehicles.
    """
    if not points:
        raise NextmvError('At least one pickup point is required.')
    if not vehicles:
        raise NextmvError('At least one vehicle is required.')

    stops: list[dict[str, object]] = []
    for p in points:
        stop: dict[str, object] = {
            'id': str(p.id),
            'location': {'lon': float(p.longitude), 'lat': float(p.latitude)},
            'quantity': -int(p.quantity),
        }
        attrs = _compatibility(p.grupo)
        if attrs:
            stop['compatibility_attributes'] = attrs
        stops.append(stop)

    vehicle_items: list[dict[str, object]] = []
    for v in vehicles:
        item: dict[str, object] = {
            'id': str(v.id),
            'capacity': int(v.capacity),
            'start_location': {'lon': float(v.start_longitude), 'lat': float(v.start_latitude)},
        }
        attrs = _compatibility(v.grupo)
        if attrs:
            item['compatibility_attributes'] = attrs
        vehicle_items.append(item)

    return {'stops': stops, 'vehicles': vehicle_items}


class NextmvClient:
    """Minimal Nextmv Cloud runs API client."""

    def __init__(
        self,
        *,
        base_url: str,
        app_id: str,
        api_key: str | None = None,
        timeout_s: int = NEXTMV_TIMEOUT_S,
    ) -> None:
        self.base_url = str(base_url).rstrip('/')
        self.app_id = str(app_id)
        self.api_key = api_key
        self.timeout_s = int(timeout_s)

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _runs_url(self) -> str:
        return f'{self.base_url}/v1/applications/{self.app_id}/runs'

    def _request(self, method: str, url: str, payload: dict[str, object] | None = None) -> dict:
        try:
            resp = requests.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_s,
            )
        except Exception as exc:
            raise NextmvError(f'Nextmv request failed: {exc}') from exc

        if not resp.ok:
            raise NextmvError(f'Nextmv returned HTTP {resp.status_code}: {resp.text[:500]}')

        try:
            data = resp.json()
        except Exception as exc:
            raise NextmvError(f'Nextmv returned non-JSON: {exc}') from exc

        if not isinstance(data, dict):
            raise NextmvError('Nextmv returned an unexpected payload.')
        return data

    def submit_run(self, routing_input: dict[str, object]) -> str:
        """
        Start a run.

        Returns:
            The run id.

        Raises:
            NextmvError: On failure.
        """
        data = self._request('POST', self._runs_url(), {'input': routing_input})
        run_id = str(data.get('run_id', '') or '')
        if not run_id:
            raise NextmvError('Nextmv response has no run_id.')
        logging.info('Nextmv run submitted: %s', run_id)
        return run_id

    def get_run(self, run_id: str) -> dict:
        """Fetch a run, including its output once it has finished."""
        return self._request('GET', f'{self._runs_url()}/{run_id}')


def run_status(run: dict) -> str:
    """Run status ('queued', 'running', 'succeeded', ...); '' if unknown."""
    meta = run.get('metadata', {}) or {}
    return str(meta.get('status_v2') or meta.get('status') or '')


def is_run_done(run: dict) -> bool:
    return run_status(run) in RUN_DONE_STATUSES


def parse_routes(run: dict) -> list[VehicleRoute]:
    """
    Extract vehicle routes from a finished run.

    Vehicles without stops are kept with an empty route.

    Raises:
        NextmvError: If the run has no solution.
    """
    try:
        vehicles = run['output']['solutions'][0]['vehicles']
    except (KeyError, IndexError, TypeError) as exc:
        raise NextmvError('Nextmv run has no solution.') from exc

    routes: list[VehicleRoute] = []
    for v in vehicles or []:
        stop_ids = [
            str(step['stop']['id'])
            for step in v.get('route', []) or []
            if isinstance(step, dict) and isinstance(step.get('stop'), dict) and 'id' in step['stop']
        ]
        duration = v.get('route_travel_duration')
        distance = v.get('route_travel_distance')
        routes.append(
            VehicleRoute(
                vehicle_id=str(v.get('id', '')),
                stop_ids=stop_ids,
                route_travel_duration=float(duration) if duration is not None else None,
                route_travel_distance=float(distance) if distance is not None else None,
            )
        )
    return routes
