"""Streamlit UI state helpers (facade).

The app imports its UI surface from here; the implementation is split across
smaller modules in the ui package.
"""

from ui.errors import UiStateError
from ui.handlers import make_nextmv_client, refresh_optimization, submit_optimization
from ui.state_accessors import (
    get_nextmv_run_id,
    get_passengers,
    get_pickup_points,
    get_routes,
    get_vehicles,
)
from ui.state_keys import init_state_if_missing
from ui.widgets import (
    geocoded_download_button,
    geocoding_controls,
    passengers_table,
    passengers_uploader,
    pickup_point_form,
    pickup_points_list,
    points_map,
    routes_list,
    use_as_pickup_points_button,
    vehicles_editor,
)

__all__ = [
    'UiStateError',
    'init_state_if_missing',
    'get_passengers',
    'get_pickup_points',
    'get_routes',
    'get_vehicles',
    'get_nextmv_run_id',
    'make_nextmv_client',
    'submit_optimization',
    'refresh_optimization',
    'passengers_uploader',
    'passengers_table',
    'geocoding_controls',
    'geocoded_download_button',
    'use_as_pickup_points_button',
    'points_map',
    'pickup_point_form',
    'pickup_points_list',
    'vehicles_editor',
    'routes_list',
]
