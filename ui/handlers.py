"""
Explicit UI handlers (no Streamlit widgets).

These functions read and write session_state and may call external services,
but only when called. Lower-level errors are wrapped in UiStateError so the
widgets can show them as-is.
"""

import math
from collections.abc import Callable, Sequence
from functools import partial
from typing import BinaryIO

from geocoder import GeocodingError, geocode_address, get_google_maps_api_key
from passengers.pacing import FixedPacer
from passengers.pickup_points import (
    Person,
    PickupPointError,
    build_pickup_point,
    parse_coordinate,
    pickup_points_from_passengers,
    remove_pickup_point,
    upsert_pickup_point,
)
from passengers.pipeline import count_geocoded, geocode_passengers
from passengers.spreadsheet import PassengerFileError, read_passengers_file
from planner.config import NEXTMV_API_BASE_URL, PlannerAppConfig, get_secret
from routing.nextmv_client import (
    NextmvClient,
    NextmvError,
    Vehicle,
    VehicleRoute,
    build_routing_input,
    is_run_done,
    parse_routes,
    run_status,
)
from ui.errors import UiStateError
from ui.state_accessors import (
    get_nextmv_run_id,
    get_passengers,
    get_pickup_points,
    get_vehicles,
    set_editing_point_id,
    set_nextmv_run_id,
    set_passengers,
    set_pickup_points,
    set_routes,
    set_upload_id,
    set_vehicles,
)


def load_passengers_from_upload(source: BinaryIO, *, upload_id: str) -> int:
    """
    Import an uploaded workbook into session_state, replacing earlier passengers.

    Args:
        source: Uploaded file object.
        upload_id: Id of this upload, so a re-upload of the same file name is imported again.

    Returns:
        Number of passengers imported.

    Raises:
        UiStateError: If the file is unreadable, empty or misses a required column.
    """
    try:
        passengers = read_passengers_file(source)
    except PassengerFileError as exc:
        set_passengers([])
        set_upload_id(None)
        raise UiStateError(str(exc)) from exc

    set_passengers(passengers)
    set_upload_id(upload_id)
    return len(passengers)


def run_geocoding(*, progress_callback: Callable[[int, int], None] | None = None) -> tuple[int, int]:
    """
    Geocode the passengers in session_state and store the result.

    Args:
        progress_callback: Optional callback(current, total).

    Returns:
        (geocoded, total)

    Raises:
        UiStateError: If there is nothing to geocode or no API key.
    """
    passengers = get_passengers()
    if not passengers:
        raise UiStateError('No passengers loaded.')

    try:
        api_key = get_google_maps_api_key()
    except GeocodingError as exc:
        raise UiStateError(str(exc)) from exc

    updated = geocode_passengers(
        passengers,
        geocode=partial(geocode_address, api_key=api_key),
        pacer=FixedPacer(),
        progress_callback=progress_callback,
    )
    set_passengers(updated)
    return count_geocoded(updated), len(updated)


def import_geocoded_as_pickup_points() -> int:
    """
    Add (or refresh) one pickup point per geocoded passenger.

    Returns:
        Number of points added or refreshed.
    """
    new_points = pickup_points_from_passengers(get_passengers())
    points = get_pickup_points()
    for point in new_points:
        points = upsert_pickup_point(points, point)
    set_pickup_points(points)
    return len(new_points)


def save_pickup_point(
    *,
    name: str,
    address: str,
    latitude: object,
    longitude: object,
    quantity: object,
    person_id: str,
    grupo: str,
    people: Sequence[Person],
    point_id: str | None,
) -> bool:
    """
    Validate the form and add or update the point.

    Returns:
        True if an existing point was updated, False if a new one was added.

    Raises:
        UiStateError: On invalid input.
    """
    try:
        point = build_pickup_point(
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
            quantity=quantity,
            person_id=person_id,
            grupo=grupo,
            people=people,
            point_id=point_id,
        )
    except PickupPointError as exc:
        raise UiStateError(str(exc)) from exc

    set_pickup_points(upsert_pickup_point(get_pickup_points(), point))
    set_editing_point_id(None)
    return point_id is not None


def delete_pickup_point(point_id: str) -> None:
    set_pickup_points(remove_pickup_point(get_pickup_points(), point_id))
    set_editing_point_id(None)


def _cell_text(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ''
    return str(value).strip()


def _parse_capacity(value: object) -> int:
    """Data editor numbers arrive as floats (20.0) or NaN for an empty cell."""
    try:
        number = float(value if _cell_text(value) else 0)
    except (TypeError, ValueError) as exc:
        raise PickupPointError('Capacity must be a non-negative integer.') from exc
    if not math.isfinite(number) or number < 0 or not number.is_integer():
        raise PickupPointError('Capacity must be a non-negative integer.')
    return int(number)


def save_vehicles_from_rows(rows: Sequence[dict[str, object]]) -> list[Vehicle]:
    """
    Store vehicles edited in a data editor.

    Rows without an id are ignored.

    Raises:
        UiStateError: On a row with a bad capacity or start location.
    """
    vehicles: list[Vehicle] = []
    for row in rows:
        vehicle_id = _cell_text(row.get('id'))
        if not vehicle_id:
            continue
        try:
            vehicles.append(
                Vehicle(
                    id=vehicle_id,
                    capacity=_parse_capacity(row.get('capacity')),
                    start_latitude=parse_coordinate(row.get('start_latitude'), 'Start latitude', limit=90),
                    start_longitude=parse_coordinate(row.get('start_longitude'), 'Start longitude', limit=180),
                    grupo=_cell_text(row.get('grupo')) or None,
                )
            )
        except PickupPointError as exc:
            raise UiStateError(f'{vehicle_id}: {exc}') from exc

    set_vehicles(vehicles)
    return vehicles


def make_nextmv_client(cfg: PlannerAppConfig) -> NextmvClient:
    """
    Nextmv client for this app instance.

    Goes through the proxy when one is configured (the proxy holds the key);
    otherwise calls Nextmv directly with NEXTMV_API_KEY.

    Raises:
        UiStateError: If neither a proxy nor an API key is configured.
    """
    app_id = get_secret('NEXTMV_APP_ID', cfg.nextmv_app_id, section='nextmv')
    proxy_url = cfg.nextmv_proxy_url or get_secret('NEXTMV_PROXY_URL', section='nextmv')
    if proxy_url:
        return NextmvClient(base_url=proxy_url, app_id=app_id)

    api_key = get_secret('NEXTMV_API_KEY', section='nextmv')
    if not api_key:
        raise UiStateError('Set NEXTMV_PROXY_URL or NEXTMV_API_KEY to use route optimization.')
    return NextmvClient(base_url=NEXTMV_API_BASE_URL, app_id=app_id, api_key=api_key)


def submit_optimization(client: NextmvClient) -> str:
    """
    Send the current pickup points and vehicles to Nextmv.

    Returns:
        The run id (also stored in session_state).

    Raises:
        UiStateError: On invalid input or Nextmv errors.
    """
    try:
        routing_input = build_routing_input(get_pickup_points(), get_vehicles())
        run_id = client.submit_run(routing_input)
    except NextmvError as exc:
        raise UiStateError(str(exc)) from exc

    set_nextmv_run_id(run_id)
    set_routes([])
    return run_id


def refresh_optimization(client: NextmvClient) -> tuple[str, list[VehicleRoute]]:
    """
    Fetch the current run and store its routes once it has succeeded.

    Returns:
        (status, routes); routes is empty until the run succeeds.

    Raises:
        UiStateError: If there is no run, or on Nextmv errors.
    """
    run_id = get_nextmv_run_id()
    if not run_id:
        raise UiStateError('No Nextmv run submitted yet.')

    try:
        run = client.get_run(run_id)
        status = run_status(run)
        routes = parse_routes(run) if is_run_done(run) and status == 'succeeded' else []
    except NextmvError as exc:
        raise UiStateError(str(exc)) from exc

    set_routes(routes)
    return status, routes
