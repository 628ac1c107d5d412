from .clipboard import BufferClipboard, Clipboard
from .controller import (
    CONFIRMATION_DELAY_SECONDS,
    EMPTY_PROMPT_MESSAGE,
    SessionController,
)
from .store import SessionNotFoundError, SessionStore

__all__ = [
    "BufferClipboard",
    "Clipboard",
    "CONFIRMATION_DELAY_SECONDS",
    "EMPTY_PROMPT_MESSAGE",
    "SessionController",
    "SessionNotFoundError",
    "SessionStore",
]
