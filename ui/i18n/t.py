"""Translation helper."""

from ui.i18n.state import get_language
from ui.i18n.translations import translate


def t(key: str, **kwargs: object) -> str:
    """Translate a UI string key using the active language.

    Args:
        key: Translation key.
        **kwargs: Optional format arguments.

    Returns:
        Translated string.
    """
    return translate(get_language(), key, **kwargs)
