"""
Configuration for the pickup planner.

Secrets are read from Streamlit secrets first, then environment variables, so
the app works the same locally and on Streamlit Cloud. The Nextmv proxy runs
outside Streamlit and simply falls through to the environment.

Secrets supported:
- GOOGLE_MAPS_API_KEY
- NEXTMV_API_KEY
- NEXTMV_APP_ID
- NEXTMV_PROXY_URL
"""

from __future__ import annotations

import os
from dataclasses import dataclass

GEOCODE_URL: str = 'https://maps.googleapis.com/maps/api/geocode/json'
GEOCODE_TIMEOUT_S: int = 10
GEOCODE_COST_PER_ADDRESS_USD: float = 0.005

PACING_EVERY: int = 10
PACING_PAUSE_S: float = 0.1

NEXTMV_API_BASE_URL: str = 'https://api.cloud.nextmv.io'
NEXTMV_TIMEOUT_S: int = 30
NEXTMV_APP_ID_DEFAULT: str = 'routing'

LOGFILE_DEFAULT: str = 'planner_log.txt'


def get_secret(name: str, default: str = '', *, section: str | None = None) -> str:
    """
    Retrieve a secret from Streamlit secrets or environment variables.

    Supports:
      - st.secrets[section][key]   (when section is given; key is name lowercased
                                    without the section prefix)
      - st.secrets[name]           (top-level)
      - os.environ[name]           (fallback)

    Args:
        name: Secret name, e.g. 'NEXTMV_API_KEY'.
        default: Default value if not found.
        section: Optional secrets.toml table name, e.g. 'nextmv'.

    Returns:
        The secret value as a stripped string.
    """
    try:
        import streamlit as st
    except Exception:
        st = None

    if st is not None:
        if section:
            try:
                cfg = st.secrets.get(section, None)
                if cfg is not None and hasattr(cfg, 'get'):
                    key = name.lower().removeprefix(f'{section.lower()}_')
                    val = cfg.get(key, '')
                    if str(val).strip():
                        return str(val).strip()
            except Exception:
                pass

        try:
            val = st.secrets.get(name, '')
            if str(val).strip():
                return str(val).strip()
        except Exception:
            pass

    return str(os.environ.get(name, default) or default).strip()


@dataclass(frozen=True)
class PlannerAppConfig:
    """Configuration for a planner app instance."""

    title: str
    default_lang: str | None = None
    logfile: str = LOGFILE_DEFAULT
    nextmv_app_id: str = NEXTMV_APP_ID_DEFAULT
    nextmv_proxy_url: str = ''
