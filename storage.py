## storage.py

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from context_window import ContextWindow
from encoder import ProjectionCache

logger = logging.getLogger(__name__)


@dataclass
class VectorSpace:
    """
    Finalized word vectors: row i of `matrix` belongs to `words[i]`.
    Read-only once built.
    """
    words: List[str]
    matrix: np.ndarray
    _rows: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._rows = {word: i for i, word in enumerate(self.words)}

    @property
    def dim(self) -> int:
        return self.matrix.shape[1]

    def vector(self, word: str) -> np.ndarray:
        return self.matrix[self._rows[word]]

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {word: self.matrix[i] for i, word in enumerate(self.words)}

    def __contains__(self, word: str) -> bool:
        return word in self._rows

    def __len__(self) -> int:
        return len(self.words)


class Accumulator:
    """
    Word -> integer vector mapping, grown one window at a time.

    Each update adds, into the center word's vector, the projection of every
    adjacent-pair transition in the window except those landing on a slot
    that holds the center word.
    """

    def __init__(self, cache: ProjectionCache):
        self.cache = cache
        self.dim = cache.dim
        self.words: Dict[str, np.ndarray] = {}
        self.updates = 0

    def _word_vector(self, word: str) -> np.ndarray:
        vector = self.words.get(word)
        if vector is None:
            vector = np.zeros(self.dim, dtype=np.int64)
            self.words[word] = vector
        return vector

    def update(self, window: ContextWindow) -> str:
        """
        Adds the current window's context into the center word's vector.
        Must run before the next token is pushed. Returns the center word.
        """
        center = window.center
        word_vector = self._word_vector(center)

        last = window.item(0)
        for i in range(1, window.size):
            current = window.item(i)
            if current != center:
                word_vector += self.cache.lookup(last + current)
            # `last` follows window positions, including skipped ones.
            last = current

        self.updates += 1
        return center

    def vector(self, word: str) -> np.ndarray:
        return self.words[word]

    def vocabulary(self) -> List[str]:
        return list(self.words)

    def finalize(self) -> VectorSpace:
        """Converts every word vector to float64 for the clustering hand-off."""
        words = list(self.words)
        matrix = np.zeros((len(words), self.dim), dtype=np.float64)
        for i, word in enumerate(words):
            matrix[i] = self.words[word]

        logger.info("Vector space finalized: %d words x %d dims.", len(words), self.dim)
        return VectorSpace(words=words, matrix=matrix)

    def __contains__(self, word: str) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)
