# tests/test_widgets.py
import streamlit as st

from ui import handlers, widgets
from ui.state_accessors import get_passengers, set_passengers


class FakeUpload:
    def __init__(self, name, file_id):
        self.name = name
        self.file_id = file_id


def test_reupload_with_same_name_is_imported_again(session_state, monkeypatch, make_passenger):
    current = {'upload': FakeUpload('passengers.xlsx', 'upload-1')}
    reads = []

    def fake_read(source):
        reads.append(source.file_id)
        return [make_passenger(pid=source.file_id)]

    monkeypatch.setattr(st, 'file_uploader', lambda *args, **kwargs: current['upload'])
    monkeypatch.setattr(st, 'success', lambda *args, **kwargs: None)
    monkeypatch.setattr(handlers, 'read_passengers_file', fake_read)

    widgets.passengers_uploader()
    widgets.passengers_uploader()
    assert reads == ['upload-1']

    current['upload'] = FakeUpload('passengers.xlsx', 'upload-2')
    widgets.passengers_uploader()

    assert reads == ['upload-1', 'upload-2']
    assert [p.id for p in get_passengers()] == ['upload-2']


def test_download_offered_before_geocoding(session_state, monkeypatch, make_passenger):
    downloads = []
    monkeypatch.setattr(st, 'download_button', lambda label, **kwargs: downloads.append(kwargs))
    passengers = [make_passenger()]
    set_passengers(passengers)

    widgets.geocoded_download_button(passengers)
    widgets.geocoded_download_button([])

    assert len(downloads) == 1
    assert downloads[0]['file_name'].startswith('geocoded_')
    assert downloads[0]['data'][:2] == b'PK'
