"""
State accessors.
"""

import streamlit as st

from passengers.pickup_points import PickupPoint
from passengers.records import PassengerRecord
from routing.nextmv_client import Vehicle, VehicleRoute
from ui.state_keys import (
    STATE_EDITING_POINT_ID,
    STATE_NEXTMV_RUN_ID,
    STATE_PASSENGERS,
    STATE_PICKUP_POINTS,
    STATE_ROUTES,
    STATE_UPLOAD_ID,
    STATE_VEHICLES,
)


def _get_list(key: str) -> list:
    value = st.session_state.get(key)
    return list(value) if isinstance(value, list) else []


def get_passengers() -> list[PassengerRecord]:
    return _get_list(STATE_PASSENGERS)


def set_passengers(passengers: list[PassengerRecord]) -> None:
    st.session_state[STATE_PASSENGERS] = list(passengers)


def get_upload_id() -> str | None:
    """Streamlit file_id of the last imported upload, or None."""
    value = st.session_state.get(STATE_UPLOAD_ID)
    return str(value) if isinstance(value, str) else None


def set_upload_id(upload_id: str | None) -> None:
    st.session_state[STATE_UPLOAD_ID] = upload_id


def get_pickup_points() -> list[PickupPoint]:
    return _get_list(STATE_PICKUP_POINTS)


def set_pickup_points(points: list[PickupPoint]) -> None:
    st.session_state[STATE_PICKUP_POINTS] = list(points)


def get_editing_point() -> PickupPoint | None:
    """
    The pickup point currently open in the form, if any.

    Returns:
        PickupPoint, or None when adding a new point (or the id no longer exists).
    """
    point_id = st.session_state.get(STATE_EDITING_POINT_ID)
    if not point_id:
        return None
    for point in get_pickup_points():
        if point.id == point_id:
            return point
    return None


def set_editing_point_id(point_id: str | None) -> None:
    st.session_state[STATE_EDITING_POINT_ID] = point_id


def get_vehicles() -> list[Vehicle]:
    return _get_list(STATE_VEHICLES)


def set_vehicles(vehicles: list[Vehicle]) -> None:
    st.session_state[STATE_VEHICLES] = list(vehicles)


def get_nextmv_run_id() -> str | None:
    value = st.session_state.get(STATE_NEXTMV_RUN_ID)
    return str(value) if isinstance(value, str) and value else None


def set_nextmv_run_id(run_id: str | None) -> None:
    st.session_state[STATE_NEXTMV_RUN_ID] = run_id


def get_routes() -> list[VehicleRoute]:
    return _get_list(STATE_ROUTES)


def set_routes(routes: list[VehicleRoute]) -> None:
    st.session_state[STATE_ROUTES] = list(routes)
