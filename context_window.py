## context_window.py

from typing import Iterator, List

from config import CONFIG, validate_window_size

EMPTY_TOKEN = ''


class ContextWindow:
    """
    Fixed-capacity ring buffer over the most recent tokens.

    Offsets are relative to the write cursor, which always points at the
    oldest retained slot: item(0) is the oldest token, item(size - 1) the
    newest. Until `size` tokens have been pushed, the unfilled slots hold
    the empty token and take part in lookups like any other token.
    """

    def __init__(self, size: int = CONFIG['WINDOW_SIZE']):
        self.size = validate_window_size(size)
        self.buffer: List[str] = [EMPTY_TOKEN] * size
        self.index = 0
        self.previous = 0

    def push(self, token: str) -> None:
        self.buffer[self.index] = token
        self.index, self.previous = (self.index + 1) % self.size, self.index

    def item(self, offset: int) -> str:
        """Token at `offset` positions after the oldest one (0 <= offset < size)."""
        return self.buffer[(self.index + offset) % self.size]

    def get_previous(self) -> str:
        """The token pushed most recently."""
        return self.buffer[self.previous]

    @property
    def center(self) -> str:
        return self.item(self.size // 2)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        for offset in range(self.size):
            yield self.item(offset)

    def __repr__(self) -> str:
        return f"ContextWindow(size={self.size}, tokens={list(self)!r})"
