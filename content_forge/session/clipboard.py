from typing import Protocol


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


class BufferClipboard:
    """Holds the last copied text for the browser to hand to navigator.clipboard."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text
