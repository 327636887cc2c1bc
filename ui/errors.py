"""UI-level errors."""


class UiStateError(RuntimeError):
    """Raised by UI handlers; the message is safe to show to the user."""
