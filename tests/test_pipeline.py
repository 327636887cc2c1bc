# tests/test_pipeline.py
import pytest

from passengers.pacing import FixedPacer
from passengers.pipeline import count_geocoded, geocode_passengers


class FakeGeocoder:
    def __init__(self, fail_addresses=()):
        self.fail_addresses = set(fail_addresses)
        self.calls = []

    def __call__(self, address, city):
        self.calls.append((address, city))
        if address in self.fail_addresses:
            return None
        return 10.0 + len(self.calls), -70.0


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def pacer(sleeps):
    return FixedPacer(sleep=sleeps.append)


def test_output_keeps_length_and_order(make_passenger, pacer):
    passengers = [make_passenger(pid=i, address=f'Calle {i}') for i in range(7)]
    geocode = FakeGeocoder(fail_addresses={'Calle 3'})

    result = geocode_passengers(passengers, geocode=geocode, pacer=pacer)

    assert [p.id for p in result] == [p.id for p in passengers]
    assert count_geocoded(result) == 6
    assert result[3] == passengers[3]
    assert result[3].latitude is None and result[3].longitude is None


def test_coordinates_are_merged(make_passenger, pacer):
    result = geocode_passengers([make_passenger(city='Bogotá')], geocode=FakeGeocoder(), pacer=pacer)
    assert (result[0].latitude, result[0].longitude) == (11.0, -70.0)
    assert result[0].city == 'Bogotá'


def test_input_records_are_not_mutated(make_passenger, pacer):
    passengers = [make_passenger()]
    geocode_passengers(passengers, geocode=FakeGeocoder(), pacer=pacer)
    assert passengers[0].latitude is None


@pytest.mark.parametrize('address', ['', '   ', '\t'])
def test_blank_address_is_never_sent(make_passenger, pacer, address):
    geocode = FakeGeocoder()
    passengers = [make_passenger(pid='a'), make_passenger(pid='b', address=address)]

    result = geocode_passengers(passengers, geocode=geocode, pacer=pacer)

    assert len(geocode.calls) == 1
    assert result[1] == passengers[1]


def test_city_is_passed_along(make_passenger, pacer):
    geocode = FakeGeocoder()
    geocode_passengers([make_passenger(address='Calle 9', city='Quito')], geocode=geocode, pacer=pacer)
    assert geocode.calls == [('Calle 9', 'Quito')]


def test_25_records_pause_exactly_twice(make_passenger, pacer, sleeps):
    passengers = [make_passenger(pid=i, address=f'Calle {i}') for i in range(25)]

    geocode_passengers(passengers, geocode=FakeGeocoder(), pacer=pacer)

    assert sleeps == [0.1, 0.1]
    assert pacer.pauses == 2


def test_ten_records_never_pause(make_passenger, pacer, sleeps):
    passengers = [make_passenger(pid=i) for i in range(10)]
    geocode_passengers(passengers, geocode=FakeGeocoder(), pacer=pacer)
    assert sleeps == []


def test_progress_is_reported_for_every_record(make_passenger, pacer):
    seen = []
    passengers = [make_passenger(pid=1), make_passenger(pid=2, address=''), make_passenger(pid=3)]

    geocode_passengers(passengers, geocode=FakeGeocoder(), pacer=pacer, progress_callback=lambda c, t: seen.append((c, t)))

    assert seen == [(1, 3), (2, 3), (3, 3)]


def test_empty_input(pacer):
    assert geocode_passengers([], geocode=FakeGeocoder(), pacer=pacer) == []


def test_pacer_schedule():
    pacer = FixedPacer(every=3, pause_s=0.5, sleep=lambda s: None)
    assert [i for i in range(10) if pacer.should_pause(i)] == [3, 6, 9]


def test_pacer_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        FixedPacer(every=0)
