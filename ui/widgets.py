"""Streamlit UI widgets (thin glue)."""

from collections.abc import Sequence

import pandas as pd
import streamlit as st

from geocoder import estimate_geocoding_cost
from passengers.pickup_points import Person, PickupPoint, filter_pickup_points, total_quantity
from passengers.pipeline import count_geocoded
from passengers.records import PassengerRecord
from passengers.spreadsheet import EXCEL_TYPES, export_filename, export_passengers_xlsx
from routing.nav_urls import build_route_url
from routing.nextmv_client import VehicleRoute
from routing.route_plot import make_matplotlib_points_map
from ui.errors import UiStateError
from ui.handlers import (
    delete_pickup_point,
    import_geocoded_as_pickup_points,
    load_passengers_from_upload,
    run_geocoding,
    save_pickup_point,
    save_vehicles_from_rows,
)
from ui.i18n.t import t
from ui.state_accessors import (
    get_editing_point,
    get_passengers,
    get_pickup_points,
    get_upload_id,
    get_vehicles,
    set_editing_point_id,
)


def passengers_uploader(*, key: str = 'passengers_upload') -> None:
    """File uploader that imports each upload once, even when a file name repeats."""
    uploaded = st.file_uploader(
        t('geocoding_instructions'),
        type=list(EXCEL_TYPES),
        key=key,
    )
    if uploaded is None or uploaded.file_id == get_upload_id():
        return

    try:
        count = load_passengers_from_upload(uploaded, upload_id=uploaded.file_id)
        st.success(t('file_loaded', count=count))
    except UiStateError as exc:
        st.error(t('import_error', error=str(exc)))


def passengers_table(passengers: Sequence[PassengerRecord]) -> None:
    """Passenger table with coordinates ('-' until geocoded)."""
    rows = [
        {
            t('col_id'): p.id,
            t('col_name'): p.name,
            t('col_address'): p.address,
            t('col_city'): p.city,
            t('col_latitude'): f'{p.latitude:.6f}' if p.latitude is not None else '-',
            t('col_longitude'): f'{p.longitude:.6f}' if p.longitude is not None else '-',
        }
        for p in passengers
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width='stretch')


def geocoding_controls() -> None:
    """Cost confirmation, start button and progress bar."""
    passengers = get_passengers()
    if not passengers:
        st.info(t('no_passengers'))
        return

    geocoded = count_geocoded(passengers)
    summary = t('passengers_loaded', count=len(passengers))
    if geocoded:
        summary += ' ' + t('geocoded_count', count=geocoded)
    st.write(summary)

    with st.expander(t('confirm_title'), expanded=True):
        cost = estimate_geocoding_cost(len(passengers))
        st.markdown(t('confirm_cost', count=len(passengers), cost=f'{cost:.2f}'))
        confirmed = st.checkbox(t('confirm_checkbox'), key='confirm_geocoding')

    if not st.button(t('start_geocoding'), disabled=not confirmed):
        return

    bar = st.progress(0.0)

    def on_progress(current: int, total: int) -> None:
        bar.progress(current / total if total else 1.0, text=t('geocoding_progress', current=current, total=total))

    try:
        ok, total = run_geocoding(progress_callback=on_progress)
        st.success(t('geocoding_done', ok=ok, total=total))
    except UiStateError as exc:
        st.error(t('geocode_key_error', error=str(exc)))


def geocoded_download_button(passengers: Sequence[PassengerRecord]) -> None:
    """Excel export; rows that are not geocoded yet keep empty coordinates."""
    if not passengers:
        return
    st.download_button(
        t('download_excel'),
        data=export_passengers_xlsx(passengers),
        file_name=export_filename(),
        mime='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )


def use_as_pickup_points_button() -> None:
    if not count_geocoded(get_passengers()):
        return
    if st.button(t('use_as_pickup_points')):
        count = import_geocoded_as_pickup_points()
        st.success(t('pickup_points_imported', count=count))


def points_map(
    points: Sequence[PickupPoint],
    *,
    title: str,
    routes: Sequence[VehicleRoute] | None = None,
) -> None:
    """Basemap plot of points (and routes); errors are shown, not raised."""
    if not points:
        return
    try:
        fig = make_matplotlib_points_map(points, title=title, routes=routes)
    except Exception as exc:
        st.error(t('map_error', error=str(exc)))
        return
    st.pyplot(fig, width='stretch')


def pickup_point_form() -> None:
    """Add/edit form. Several people can share a point via the people table."""
    editing = get_editing_point()
    suffix = editing.id if editing else 'new'

    st.subheader(t('form_title_edit') if editing else t('form_title_add'))

    with st.form(key=f'pickup_form_{suffix}', clear_on_submit=editing is None):
        name = st.text_input(t('name_label'), value=editing.name if editing else '')
        address = st.text_input(t('address_label'), value=editing.address if editing else '')
        col_lat, col_lng = st.columns(2)
        with col_lat:
            latitude = st.text_input(t('latitude_label'), value=str(editing.latitude) if editing else '')
        with col_lng:
            longitude = st.text_input(t('longitude_label'), value=str(editing.longitude) if editing else '')
        col_qty, col_grupo = st.columns(2)
        with col_qty:
            quantity = st.text_input(t('quantity_label'), value=str(editing.quantity) if editing else '1')
        with col_grupo:
            grupo = st.text_input(t('grupo_label'), value=(editing.grupo or '') if editing else '')
        person_id = st.text_input(t('person_id_label'), value=(editing.person_id or '') if editing else '')

        st.markdown(f"**{t('people_label')}**")
        st.caption(t('people_help'))
        people_rows = [{'name': p.name, 'person_id': p.person_id} for p in editing.people] if editing else []
        people_df = st.data_editor(
            pd.DataFrame(people_rows, columns=['name', 'person_id']),
            num_rows='dynamic',
            hide_index=True,
            key=f'people_editor_{suffix}',
        )

        submitted = st.form_submit_button(t('update_point') if editing else t('add_point'))

    if editing is not None and st.button(t('cancel_edit')):
        set_editing_point_id(None)
        st.rerun()

    if not submitted:
        return

    people = [
        Person(name=str(row['name'] or '').strip(), person_id=str(row['person_id'] or '').strip())
        for _, row in people_df.fillna('').iterrows()
        if str(row['name'] or '').strip()
    ]
    # A single row adds nothing over the plain name and ID fields.
    if len(people) < 2:
        people = []

    try:
        updated = save_pickup_point(
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
            quantity=quantity,
            person_id=person_id,
            grupo=grupo,
            people=people,
            point_id=editing.id if editing else None,
        )
    except UiStateError as exc:
        st.error(t('point_error', error=str(exc)))
        return

    st.success(t('point_updated') if updated else t('point_added'))
    if updated:
        st.rerun()


def pickup_points_list() -> None:
    """Searchable list with edit and delete buttons."""
    points = get_pickup_points()
    st.subheader(t('pickup_title', count=len(points)))

    if not points:
        st.caption(t('no_pickup_points'))
        return

    st.caption(t('total_quantity', count=total_quantity(points)))
    query = st.text_input(t('search_placeholder'), key='pickup_search', label_visibility='collapsed',
                          placeholder=t('search_placeholder'))
    matches = filter_pickup_points(points, query)
    if not matches:
        st.caption(t('no_search_results', query=query))
        return

    for point in matches:
        with st.container(border=True):
            col_info, col_edit, col_delete = st.columns([6, 1, 1])
            with col_info:
                for person in point.people or [Person(name=point.name)]:
                    st.markdown(f'**{person.name}**' + (f' ({person.person_id})' if person.person_id else ''))
                st.caption(point.address)
                details = [t('quantity_line', quantity=point.quantity)]
                if point.grupo:
                    details.append(t('grupo_line', grupo=point.grupo))
                st.caption(' · '.join(details))
            with col_edit:
                if st.button(t('edit'), key=f'edit_{point.id}'):
                    set_editing_point_id(point.id)
                    st.rerun()
            with col_delete:
                if st.button(t('delete'), key=f'delete_{point.id}'):
                    delete_pickup_point(point.id)
                    st.success(t('point_deleted'))
                    st.rerun()


def vehicles_editor() -> None:
    """Editable vehicle table, stored on every change."""
    rows = [
        {
            'id': v.id,
            'capacity': v.capacity,
            'start_latitude': v.start_latitude,
            'start_longitude': v.start_longitude,
            'grupo': v.grupo or '',
        }
        for v in get_vehicles()
    ]
    columns = ['id', 'capacity', 'start_latitude', 'start_longitude', 'grupo']

    st.subheader(t('vehicles_label'))
    edited = st.data_editor(
        pd.DataFrame(rows, columns=columns),
        num_rows='dynamic',
        hide_index=True,
        key='vehicles_editor',
        column_config={
            'id': st.column_config.TextColumn(t('vehicle_id')),
            'capacity': st.column_config.NumberColumn(t('capacity'), min_value=0, step=1),
            'start_latitude': st.column_config.NumberColumn(t('start_latitude'), format='%.6f'),
            'start_longitude': st.column_config.NumberColumn(t('start_longitude'), format='%.6f'),
            'grupo': st.column_config.TextColumn(t('grupo_label')),
        },
    )

    try:
        save_vehicles_from_rows(edited.dropna(how='all').to_dict('records'))
    except UiStateError as exc:
        st.error(t('vehicle_error', error=str(exc)))


def routes_list(routes: Sequence[VehicleRoute], points: Sequence[PickupPoint]) -> None:
    """One line per vehicle route with a Google Maps link."""
    points_by_id = {p.id: p for p in points}
    st.subheader(t('routes_title'))
    for route in routes:
        known = [s for s in route.stop_ids if s in points_by_id]
        st.markdown(t('route_line', vehicle=route.vehicle_id, stops=len(known)))
        for k, stop_id in enumerate(known, start=1):
            point = points_by_id[stop_id]
            st.write(f'{k}. {point.name} ({point.address})')
        url = build_route_url(route.stop_ids, points_by_id)
        if url:
            st.link_button(t('open_in_maps'), url)
