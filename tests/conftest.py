# tests/conftest.py
import json

import pytest
import streamlit as st

from nextmv_proxy import create_app
from passengers.records import PassengerRecord


class FakeResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(self, payload=None, *, status_code=200, text=None, headers=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)
        self.content = self.text.encode('utf-8')
        self.headers = headers or {'Content-Type': 'application/json'}

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise RuntimeError(f'HTTP {self.status_code}')

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON body')
        return self._payload


@pytest.fixture()
def fake_response():
    return FakeResponse


@pytest.fixture()
def make_passenger():
    def _make(pid='1', address='Av. Reforma 123', city='CDMX', name=None, **kwargs):
        return PassengerRecord(id=str(pid), name=name or f'Passenger {pid}', address=address, city=city, **kwargs)

    return _make


@pytest.fixture()
def proxy_app():
    app = create_app({
        'TESTING': True,
        'NEXTMV_API_KEY': 'test-key',
        'NEXTMV_API_BASE_URL': 'https://nextmv.test',
    })
    yield app


@pytest.fixture()
def client(proxy_app):
    return proxy_app.test_client()


@pytest.fixture()
def session_state(monkeypatch):
    """A plain dict standing in for st.session_state."""
    state = {}
    monkeypatch.setattr(st, 'session_state', state)
    return state
