## tokenizer.py

from typing import Iterable, Iterator, List, TextIO

from config import PIPELINE_PARAMS
from errors import StreamReadError

APOSTROPHE = "'"


def is_word_char(ch: str) -> bool:
    """Letters (any script) and the apostrophe make up words."""
    return ch.isalpha() or ch == APOSTROPHE


def lower_char(ch: str) -> str:
    """Lower-cases one character; mappings that expand to several characters are skipped."""
    low = ch.lower()
    return low if len(low) == 1 else ch


def iter_chars(stream: TextIO, chunk_size: int = PIPELINE_PARAMS['READ_CHUNK_CHARS']) -> Iterator[str]:
    """
    Yields the characters of a text stream one at a time.
    Reads in chunks; an empty read is end of input.
    """
    while True:
        try:
            chunk = stream.read(chunk_size)
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f"Failed to read character stream: {e}") from e
        if not chunk:
            return
        yield from chunk


def iter_tokens(chars: Iterable[str]) -> Iterator[str]:
    """
    Assembles lower-cased tokens from a character sequence.

    A token is completed by the first non-word character that follows it.
    Whatever is still pending when the characters run out is dropped.
    """
    pending = []
    for ch in chars:
        if is_word_char(ch):
            pending.append(lower_char(ch))
        elif pending:
            yield ''.join(pending)
            pending = []


def tokenize(text: str) -> List[str]:
    return list(iter_tokens(text))
