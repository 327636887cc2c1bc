"""Language choice stored in Streamlit session_state."""

import streamlit as st

from ui.i18n.translations import DEFAULT_LANG, SUPPORTED_LANGS

STATE_LANG = 'ui_lang'


def _lang_from_locale(locale: str | None) -> str:
    """Map a browser locale to a supported language code.

    Args:
        locale: Browser locale like 'es-MX' or 'en-US'.

    Returns:
        'en' for English locales, the default language otherwise.
    """
    if not locale:
        return DEFAULT_LANG

    loc = str(locale).strip().lower()
    if loc.startswith('en'):
        return 'en'
    return DEFAULT_LANG


def init_language_if_missing(*, default_lang: str | None = None) -> None:
    """Initialize UI language in session_state.

    If default_lang is None, derive it from st.context.locale.
    """
    if STATE_LANG in st.session_state:
        return

    if default_lang is None:
        locale = getattr(st.context, 'locale', None)
        default_lang = _lang_from_locale(locale)

    st.session_state[STATE_LANG] = str(default_lang)


def get_language() -> str:
    """Current language code, the default language if missing or unsupported."""
    value = st.session_state.get(STATE_LANG)
    if isinstance(value, str) and value in SUPPORTED_LANGS:
        return value
    return DEFAULT_LANG


def set_language(lang: str) -> None:
    st.session_state[STATE_LANG] = str(lang)
