# nextmv_proxy.py
"""
Pass-through proxy to the Nextmv Cloud API.

Relays any path, method, query string and body to NEXTMV_API_BASE_URL, adding
the bearer key so it never reaches the browser, and answers with the upstream
status and body unchanged plus CORS headers.

Run locally:
    flask --app nextmv_proxy run --port 8787

Secrets supported:
- NEXTMV_API_KEY (required)
- NEXTMV_API_BASE_URL (optional, defaults to the public Nextmv Cloud API)
"""

from __future__ import annotations

import logging

import requests
from flask import Blueprint, Flask, Response, current_app, jsonify, request

from planner.config import NEXTMV_API_BASE_URL, NEXTMV_TIMEOUT_S, get_secret

CORS_HEADERS: dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
    'Access-Control-Allow-Methods': 'GET, POST, PUT, PATCH, DELETE, OPTIONS',
}
METHODS: list[str] = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']
BODY_METHODS: frozenset[str] = frozenset({'POST', 'PUT', 'PATCH'})

proxy_bp = Blueprint('nextmv_proxy', __name__)


class ProxyConfigError(RuntimeError):
    """Raised when the proxy is missing configuration."""


def _with_cors(resp: Response) -> Response:
    for key, value in CORS_HEADERS.items():
        resp.headers[key] = value
    return resp


def _json_response(payload: dict[str, str], status: int) -> Response:
    resp = jsonify(payload)
    resp.status_code = status
    return _with_cors(resp)


def _api_key() -> str:
    api_key = str(current_app.config.get('NEXTMV_API_KEY', '') or '').strip()
    if not api_key:
        raise ProxyConfigError('NEXTMV_API_KEY is not configured.')
    return api_key


@proxy_bp.route('/', defaults={'api_path': ''}, methods=METHODS)
@proxy_bp.route('/<path:api_path>', methods=METHODS)
def forward(api_path: str) -> Response:
    """Relay one request upstream."""
    if request.method == 'OPTIONS':
        return _with_cors(Response(status=200))

    api_path = api_path.strip('/')
    if not api_path:
        return _json_response({'error': 'Invalid proxy path. Expected format: /v1/applications/...'}, 400)

    try:
        base_url = str(current_app.config['NEXTMV_API_BASE_URL']).rstrip('/')
        target_url = f'{base_url}/{api_path}'
        query = request.query_string.decode('utf-8')
        full_url = f'{target_url}?{query}' if query else target_url

        logging.info('Proxying %s request to: %s', request.method, full_url)

        body = request.get_data() if request.method in BODY_METHODS else None
        upstream = requests.request(
            request.method,
            full_url,
            headers={
                'Authorization': f'Bearer {_api_key()}',
                'Content-Type': 'application/json',
                'Accept': 'application/json',
            },
            data=body or None,
            timeout=int(current_app.config['NEXTMV_TIMEOUT_S']),
        )

        resp = Response(
            upstream.content,
            status=upstream.status_code,
            content_type=upstream.headers.get('Content-Type') or 'application/json',
        )
        return _with_cors(resp)
    except Exception as exc:
        logging.exception('Error in nextmv-proxy')
        return _json_response({'error': str(exc), 'message': str(exc)}, 500)


def create_app(config: dict[str, object] | None = None) -> Flask:
    """
    Build the proxy WSGI app.

    Args:
        config: Optional overrides (NEXTMV_API_KEY, NEXTMV_API_BASE_URL, NEXTMV_TIMEOUT_S, TESTING).

    Returns:
        Flask app.
    """
    app = Flask(__name__)
    app.config.update(
        NEXTMV_API_KEY=get_secret('NEXTMV_API_KEY', section='nextmv'),
        NEXTMV_API_BASE_URL=get_secret('NEXTMV_API_BASE_URL', NEXTMV_API_BASE_URL),
        NEXTMV_TIMEOUT_S=NEXTMV_TIMEOUT_S,
    )
    if config:
        app.config.update(config)

    app.register_blueprint(proxy_bp)
    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
    create_app().run(port=8787)
