"""
Streamlit session_state keys and initialization.

Everything the planner knows lives in the session; nothing is persisted.
"""

import streamlit as st

STATE_PASSENGERS = 'passengers'
STATE_UPLOAD_ID = 'upload_id'
STATE_PICKUP_POINTS = 'pickup_points'
STATE_EDITING_POINT_ID = 'editing_point_id'
STATE_VEHICLES = 'vehicles'
STATE_NEXTMV_RUN_ID = 'nextmv_run_id'
STATE_ROUTES = 'routes'

_DEFAULTS: dict[str, object] = {
    STATE_PASSENGERS: [],
    STATE_UPLOAD_ID: None,
    STATE_PICKUP_POINTS: [],
    STATE_EDITING_POINT_ID: None,
    STATE_VEHICLES: [],
    STATE_NEXTMV_RUN_ID: None,
    STATE_ROUTES: [],
}


def init_state_if_missing() -> None:
    """Initialize Streamlit session_state keys if missing."""
    for key, default in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = list(default) if isinstance(default, list) else default
