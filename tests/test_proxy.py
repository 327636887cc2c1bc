# tests/test_proxy.py
import pytest
import requests

import nextmv_proxy
from nextmv_proxy import create_app


@pytest.fixture()
def upstream(monkeypatch, fake_response):
    """Records upstream calls; the response can be swapped per test."""
    state = {'calls': [], 'response': fake_response({'run_id': 'run-1'}, status_code=202)}

    def fake_request(method, url, headers=None, data=None, timeout=None):
        state['calls'].append({'method': method, 'url': url, 'headers': headers, 'data': data, 'timeout': timeout})
        if isinstance(state['response'], Exception):
            raise state['response']
        return state['response']

    monkeypatch.setattr(nextmv_proxy.requests, 'request', fake_request)
    return state


def test_preflight_returns_cors_headers(client, upstream):
    resp = client.open('/v1/applications/routing/runs', method='OPTIONS')

    assert resp.status_code == 200
    assert resp.headers['Access-Control-Allow-Origin'] == '*'
    assert 'POST' in resp.headers['Access-Control-Allow-Methods']
    assert upstream['calls'] == []


def test_post_is_forwarded_unchanged(client, upstream):
    body = b'{"input": {"stops": []}}'
    resp = client.post('/v1/applications/routing/runs?instance_id=latest', data=body,
                       content_type='application/json')

    assert resp.status_code == 202
    assert resp.get_json() == {'run_id': 'run-1'}
    assert resp.headers['Access-Control-Allow-Origin'] == '*'

    call = upstream['calls'][0]
    assert call['method'] == 'POST'
    assert call['url'] == 'https://nextmv.test/v1/applications/routing/runs?instance_id=latest'
    assert call['data'] == body
    assert call['headers']['Authorization'] == 'Bearer test-key'
    assert call['timeout'] == 30


def test_get_sends_no_body_and_keeps_upstream_errors(client, upstream, fake_response):
    upstream['response'] = fake_response({'error': 'not found'}, status_code=404)

    resp = client.get('/v1/applications/routing/runs/missing')

    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'not found'}
    assert upstream['calls'][0]['method'] == 'GET'
    assert upstream['calls'][0]['data'] is None


def test_empty_path_is_rejected(client, upstream):
    resp = client.get('/')

    assert resp.status_code == 400
    assert 'Invalid proxy path' in resp.get_json()['error']
    assert upstream['calls'] == []


def test_upstream_failure_becomes_500(client, upstream):
    upstream['response'] = requests.ConnectionError('connection refused')

    resp = client.get('/v1/applications/routing/runs/run-1')

    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'connection refused', 'message': 'connection refused'}
    assert resp.headers['Access-Control-Allow-Origin'] == '*'


def test_missing_key_becomes_500(upstream, monkeypatch):
    monkeypatch.delenv('NEXTMV_API_KEY', raising=False)
    app = create_app({'TESTING': True, 'NEXTMV_API_KEY': ''})

    resp = app.test_client().get('/v1/applications/routing/runs/run-1')

    assert resp.status_code == 500
    assert 'NEXTMV_API_KEY' in resp.get_json()['error']
    assert upstream['calls'] == []
