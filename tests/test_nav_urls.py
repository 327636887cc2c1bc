# tests/test_nav_urls.py
import pytest

from passengers.pickup_points import PickupPoint
from routing.nav_urls import build_google_maps_url, build_route_url, point_location


def _point(pid, lat, lng):
    return PickupPoint(id=pid, name=pid, address=f'Calle {pid}', latitude=lat, longitude=lng)


def test_two_stops_have_no_waypoints():
    url = build_google_maps_url(['Plaza Mayor, Madrid', 'Atocha'])
    assert url == ('https://www.google.com/maps/dir/?api=1'
                   '&origin=Plaza%20Mayor%2C%20Madrid&destination=Atocha')


def test_intermediate_stops_become_waypoints():
    url = build_google_maps_url(['A', 'B', 'C', 'D'])
    assert url.endswith('&origin=A&destination=D&waypoints=B|C')


def test_one_stop_is_not_a_route():
    with pytest.raises(ValueError):
        build_google_maps_url(['A'])


def test_route_url_uses_coordinates_and_skips_unknown_stops():
    points = {'a': _point('a', 4.6, -74.1), 'b': _point('b', 4.7, -74.05)}

    url = build_route_url(['bus-start', 'a', 'b'], points)

    assert point_location(points['a']) == '4.600000,-74.100000'
    assert 'origin=4.600000%2C-74.100000' in url
    assert 'destination=4.700000%2C-74.050000' in url
    assert build_route_url(['bus-start', 'a'], points) is None
