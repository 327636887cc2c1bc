"""
Shared Streamlit planner application.

All planning UI lives here. Instance-specific entry points should only provide
configuration and call `run_planner_app(cfg=...)`.
"""

from __future__ import annotations

import logging

import streamlit as st

from passengers.pickup_points import pickup_points_from_passengers
from planner.config import PlannerAppConfig
from routing.timing import timeblock
from ui.i18n.t import t
from ui.i18n.widgets import language_selector
from ui.ui_state import (
    UiStateError,
    geocoded_download_button,
    geocoding_controls,
    get_nextmv_run_id,
    get_passengers,
    get_pickup_points,
    get_routes,
    get_vehicles,
    init_state_if_missing,
    make_nextmv_client,
    passengers_table,
    passengers_uploader,
    pickup_point_form,
    pickup_points_list,
    points_map,
    refresh_optimization,
    routes_list,
    submit_optimization,
    use_as_pickup_points_button,
    vehicles_editor,
)


def _setup_logging(*, logfile: str) -> None:
    """Configure logging once per process."""
    if getattr(_setup_logging, '_configured', False):
        return

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=[
            logging.FileHandler(logfile, mode='a', encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )
    setattr(_setup_logging, '_configured', True)


def _geocoding_page() -> None:
    st.header(t('geocoding_title'))
    passengers_uploader()
    geocoding_controls()

    passengers = get_passengers()
    if not passengers:
        return

    geocoded_download_button(passengers)
    use_as_pickup_points_button()

    geocoded_points = pickup_points_from_passengers(passengers)
    if geocoded_points:
        col_map, col_table = st.columns(2)
        with col_map:
            points_map(geocoded_points, title=t('map_preview'))
        with col_table:
            passengers_table(passengers)
    else:
        passengers_table(passengers)


def _pickup_points_page() -> None:
    col_form, col_list = st.columns(2)
    with col_form:
        pickup_point_form()
    with col_list:
        pickup_points_list()

    points_map(get_pickup_points(), title=t('map_preview'))


def _optimization_page(cfg: PlannerAppConfig) -> None:
    st.header(t('optimization_title'))
    vehicles_editor()

    points = get_pickup_points()
    logs: list[str] = []

    if not points:
        st.info(t('need_points'))
    if not get_vehicles():
        st.info(t('need_vehicles'))

    if st.button(t('optimize'), disabled=not points or not get_vehicles()):
        try:
            client = make_nextmv_client(cfg)
            with st.spinner(t('submitting')):
                with timeblock('Nextmv submit', logs):
                    run_id = submit_optimization(client)
            st.success(t('run_submitted', run_id=run_id))
        except UiStateError as exc:
            st.error(t('nextmv_error', error=str(exc)))

    run_id = get_nextmv_run_id()
    if run_id and st.button(t('refresh_run')):
        try:
            client = make_nextmv_client(cfg)
            with timeblock('Nextmv refresh', logs):
                status, _routes = refresh_optimization(client)
            st.info(t('run_status', run_id=run_id, status=status or '?'))
            if status in ('failed', 'canceled'):
                st.error(t('run_failed', status=status))
        except UiStateError as exc:
            st.error(t('nextmv_error', error=str(exc)))

    routes = get_routes()
    if routes:
        routes_list(routes, points)
        points_map(points, title=t('routes_title'), routes=routes)

    if logs:
        with st.expander(t('timinglog_expander')):
            for line in logs:
                st.write(line)


def run_planner_app(*, cfg: PlannerAppConfig) -> None:
    """Run the shared Streamlit planner app for the given configuration."""
    _setup_logging(logfile=cfg.logfile)
    logging.info('Starting planner app: %s', cfg.title)

    st.set_page_config(page_title=cfg.title, layout='wide')
    language_selector(default_lang=cfg.default_lang)
    st.title(cfg.title)

    init_state_if_missing()

    pages = {
        'geocoding': t('page_geocoding'),
        'pickup_points': t('page_pickup_points'),
        'optimization': t('page_optimization'),
    }
    page = st.sidebar.radio(
        t('nav_label'),
        list(pages),
        format_func=lambda key: pages[key],
        key='nav_page',
    )

    if page == 'geocoding':
        _geocoding_page()
    elif page == 'pickup_points':
        _pickup_points_page()
    else:
        _optimization_page(cfg)
