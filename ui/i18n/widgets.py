"""Widgets related to language selection."""

import streamlit as st

from ui.i18n.state import get_language, init_language_if_missing, set_language
from ui.i18n.t import t
from ui.i18n.translations import SUPPORTED_LANGS


def language_selector(*, default_lang: str | None = None, key: str = 'language_selector') -> str:
    """Render a sidebar language selector and store the choice in session_state.

    Args:
        default_lang: Default language code, or None to auto-detect from browser locale.
        key: Streamlit widget key.

    Returns:
        Selected language code.
    """
    init_language_if_missing(default_lang=default_lang)

    codes = list(SUPPORTED_LANGS)
    current = get_language()

    chosen = st.sidebar.selectbox(
        t('language_label'),
        options=codes,
        index=codes.index(current) if current in codes else 0,
        format_func=lambda code: SUPPORTED_LANGS[code],
        key=key,
    )
    set_language(chosen)
    return chosen
