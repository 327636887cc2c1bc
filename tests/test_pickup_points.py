# tests/test_pickup_points.py
import pytest

from passengers.pickup_points import (
    Person,
    PickupPoint,
    PickupPointError,
    build_pickup_point,
    filter_pickup_points,
    join_people,
    parse_coordinate,
    parse_people,
    parse_quantity,
    pickup_points_from_passengers,
    remove_pickup_point,
    total_quantity,
    upsert_pickup_point,
)


def _point(pid, name='Ana', address='Calle 1', person_id=None, **kwargs):
    return PickupPoint(id=pid, name=name, address=address, latitude=1.0, longitude=2.0, person_id=person_id, **kwargs)


def test_parse_people_pairs_names_and_ids_by_position():
    assert parse_people('Ana, Luis ,Eva', 'P1, P2') == [
        Person('Ana', 'P1'),
        Person('Luis', 'P2'),
        Person('Eva', ''),
    ]
    assert parse_people('', 'P1') == []


def test_join_people_skips_blank_ids():
    assert join_people([Person('Ana', 'P1'), Person('Luis', ''), Person('Eva', 'P3')]) == ('Ana, Luis, Eva', 'P1, P3')


def test_build_pickup_point_from_form_text():
    point = build_pickup_point(
        name=' Bodega Centro ',
        address='Calle 5',
        latitude='4.60971',
        longitude='-74.08175',
        quantity='3',
        grupo='  ',
        point_id='p1',
    )
    assert point == PickupPoint(
        id='p1',
        name='Bodega Centro',
        address='Calle 5',
        latitude=4.60971,
        longitude=-74.08175,
        quantity=3,
        person_id=None,
        grupo=None,
    )


def test_people_override_name_fields():
    point = build_pickup_point(
        name='ignored',
        address='Calle 5',
        latitude=1,
        longitude=2,
        people=[Person('Ana', 'P1'), Person('Luis', 'P2')],
        grupo='A',
    )
    assert point.name == 'Ana, Luis'
    assert point.person_id == 'P1, P2'
    assert point.grupo == 'A'
    assert point.people == [Person('Ana', 'P1'), Person('Luis', 'P2')]
    assert point.id


@pytest.mark.parametrize('kwargs', [
    {'name': '', 'address': 'Calle 1', 'latitude': 1, 'longitude': 2},
    {'name': 'Ana', 'address': ' ', 'latitude': 1, 'longitude': 2},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': '', 'longitude': 2},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 1, 'longitude': 'west'},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 'nan', 'longitude': 2},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 1, 'longitude': 'inf'},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 90.5, 'longitude': 2},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 1, 'longitude': -180.1},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 1, 'longitude': 2, 'quantity': '-1'},
    {'name': 'Ana', 'address': 'Calle 1', 'latitude': 1, 'longitude': 2, 'quantity': '2.5'},
])
def test_invalid_input_is_rejected(kwargs):
    with pytest.raises(PickupPointError):
        build_pickup_point(**kwargs)


def test_zero_quantity_is_allowed():
    assert parse_quantity('0') == 0
    assert parse_quantity(' 7 ') == 7


def test_upsert_replaces_in_place_or_appends():
    points = [_point('a'), _point('b')]
    replaced = upsert_pickup_point(points, _point('a', name='Zoe'))
    assert [p.name for p in replaced] == ['Zoe', 'Ana']
    appended = upsert_pickup_point(points, _point('c'))
    assert [p.id for p in appended] == ['a', 'b', 'c']
    assert [p.id for p in points] == ['a', 'b']


def test_remove_pickup_point():
    assert [p.id for p in remove_pickup_point([_point('a'), _point('b')], 'a')] == ['b']


def test_filter_searches_names_address_and_ids():
    points = [
        _point('a', name='Ana, Luis', address='Calle Sol'),
        _point('b', name='Eva', address='Avenida Luna', person_id='X-42'),
    ]
    assert [p.id for p in filter_pickup_points(points, 'luis')] == ['a']
    assert [p.id for p in filter_pickup_points(points, 'LUNA')] == ['b']
    assert [p.id for p in filter_pickup_points(points, 'x-4')] == ['b']
    assert filter_pickup_points(points, 'nobody') == []
    assert filter_pickup_points(points, '  ') == points


def test_points_from_passengers_skip_ungeocoded(make_passenger):
    passengers = [make_passenger(pid=1, latitude=1.5, longitude=2.5), make_passenger(pid=2)]
    points = pickup_points_from_passengers(passengers)
    assert [(p.id, p.latitude, p.longitude, p.quantity) for p in points] == [('1', 1.5, 2.5, 1)]


def test_total_quantity():
    assert total_quantity([_point('a', quantity=2), _point('b', quantity=3)]) == 5


def test_coordinate_bounds_are_inclusive():
    assert parse_coordinate('-90', 'Latitude', limit=90) == -90.0
    assert parse_coordinate(180, 'Longitude', limit=180) == 180.0
