# geocoder.py
"""
Google Geocoding client for the pickup planner.

Responsibilities:
- Build the geocoding query from a cleaned address and an optional city.
- Call the Google Geocoding API once per address.
- Turn every failure into "no coordinates" plus a log line; callers never see
  an exception for a single bad address.

Secrets supported:
- GOOGLE_MAPS_API_KEY (required)
"""

import logging

import requests

from passengers.address_cleaner import clean_address
from planner.config import (
    GEOCODE_COST_PER_ADDRESS_USD,
    GEOCODE_TIMEOUT_S,
    GEOCODE_URL,
    get_secret,
)


class GeocodingError(RuntimeError):
    """Raised when a geocoding request fails."""


class ZeroResultsError(GeocodingError):
    """Raised when the geocoder finds nothing for the query."""


def get_google_maps_api_key() -> str:
    """
    Retrieve the Google Maps API key from Streamlit secrets or the environment.

    Returns:
        API key.

    Raises:
        GeocodingError: If not configured.
    """
    api_key = get_secret('GOOGLE_MAPS_API_KEY')
    if not api_key:
        raise GeocodingError(
            'Google Maps API key not found. Set GOOGLE_MAPS_API_KEY in '
            '.streamlit/secrets.toml (or as an environment variable).'
        )
    return api_key


def estimate_geocoding_cost(n_addresses: int) -> float:
    """Estimated Google bill in USD for geocoding `n_addresses` addresses."""
    return max(int(n_addresses), 0) * GEOCODE_COST_PER_ADDRESS_USD


def build_geocode_query(address: str, city: str | None = None) -> str:
    """
    Build the single-line geocoding query.

    Args:
        address: Raw address text; cleaned before use.
        city: Optional city appended after a comma.

    Returns:
        Query string, or '' when the cleaned address is empty.
    """
    cleaned = clean_address(address)
    if not cleaned:
        return ''

    city_s = str(city or '').strip()
    return f'{cleaned}, {city_s}' if city_s else cleaned


def _google_geocode_request(
    *,
    query: str,
    api_key: str,
    url: str = GEOCODE_URL,
    timeout_s: int = GEOCODE_TIMEOUT_S,
) -> tuple[float, float]:
    """
    Call Google Geocoding API once.

    Args:
        query: Full address query (already cleaned).
        api_key: Google API key.
        url: Geocoding endpoint.
        timeout_s: Requests timeout.

    Returns:
        (lat, lng) of the first result.

    Raises:
        ZeroResultsError: When Google answers ZERO_RESULTS.
        GeocodingError: On network errors, bad responses or any other status.
    """
    params: dict[str, str] = {'address': query, 'key': api_key}

    try:
        resp = requests.get(url, params=params, timeout=int(timeout_s))
        resp.raise_for_status()
    except Exception as exc:
        raise GeocodingError(f'Google geocoding request failed: {exc}') from exc

    try:
        data = resp.json()
    except Exception as exc:
        raise GeocodingError(f'Google geocoding returned non-JSON: {exc}') from exc

    status = str(data.get('status', '') or '')
    if status == 'ZERO_RESULTS':
        raise ZeroResultsError('Google geocoding returned ZERO_RESULTS.')
    if status != 'OK':
        msg = str(data.get('error_message', '') or '')
        raise GeocodingError(f'Google geocoding failed, status={status}, message={msg}')

    results = data.get('results', []) or []
    if not results:
        raise GeocodingError('Google geocoding returned no results.')

    try:
        loc = results[0]['geometry']['location']
        return float(loc['lat']), float(loc['lng'])
    except Exception as exc:
        raise GeocodingError(f'Unexpected Google geocoding response shape: {exc}') from exc


def geocode_address(
    address: str,
    city: str | None = None,
    *,
    api_key: str,
    url: str = GEOCODE_URL,
    timeout_s: int = GEOCODE_TIMEOUT_S,
) -> tuple[float, float] | None:
    """
    Geocode one address, swallowing failures.

    Args:
        address: Raw address text.
        city: Optional city.
        api_key: Google API key.
        url: Geocoding endpoint.
        timeout_s: Requests timeout.

    Returns:
        (lat, lng), or None when the address is empty, not found or the call failed.
    """
    query = build_geocode_query(address, city)
    if not query:
        logging.warning('Empty address after cleaning: %r', address)
        return None

    try:
        lat, lng = _google_geocode_request(query=query, api_key=api_key, url=url, timeout_s=timeout_s)
    except ZeroResultsError:
        logging.warning('No results found for address: %s', query)
        return None
    except GeocodingError as exc:
        logging.error('Geocoding error for %s: %s', query, exc)
        return None

    logging.info('Google geocode "%s" -> lat=%.6f, lng=%.6f', query, lat, lng)
    return lat, lng
