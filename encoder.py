## encoder.py

import logging
from typing import Dict

import numpy as np

from config import CONFIG, validate_denominator, validate_dimension

logger = logging.getLogger(__name__)

# --- FNV-1 (64 bit) CONSTANTS ---
FNV64_OFFSET_BASIS = 0xcbf29ce484222325
FNV64_PRIME = 0x100000001b3
MASK_64 = (1 << 64) - 1


def fnv1_64(key: str) -> int:
    """
    64-bit FNV-1 hash of the UTF-8 bytes of `key`.
    Stable across processes, unlike the salted builtin hash().
    """
    h = FNV64_OFFSET_BASIS
    for byte in key.encode('utf-8'):
        h = (h * FNV64_PRIME) & MASK_64
        h ^= byte
    return h


def generate_trits(seed: int, dim: int, denominator: int) -> np.ndarray:
    """
    Draws a sparse {-1, 0, +1} vector from a generator seeded with `seed`.

    Each coordinate is an independent draw from [0, denominator):
    0 -> +1, 1 -> -1, anything else -> 0. With the default denominator of 6
    a third of the coordinates are nonzero (Achlioptas sparse projection).
    """
    rnd = np.random.default_rng(seed)
    draws = rnd.integers(0, denominator, size=dim)

    transform = np.zeros(dim, dtype=np.int8)
    transform[draws == 0] = 1
    transform[draws == 1] = -1
    return transform


class ProjectionCache:
    """
    Memoizes one projection vector per pair-key hash.

    Entries are never evicted; the cache grows with the number of distinct
    pair-keys seen during a run.
    """

    def __init__(self, dim: int = CONFIG['VECTOR_DIM'], denominator: int = CONFIG['TRIT_DENOMINATOR']):
        self.dim = validate_dimension(dim)
        self.denominator = validate_denominator(denominator)
        self._cache: Dict[int, np.ndarray] = {}
        self.hits = 0
        self.misses = 0

        logger.info(
            "Projection cache initialized: dim %d, nonzero density %.3f.",
            dim, 2.0 / denominator,
        )

    def lookup(self, key: str) -> np.ndarray:
        """Returns the projection vector for `key`, generating it on first use."""
        h = fnv1_64(key)
        transform = self._cache.get(h)
        if transform is not None:
            self.hits += 1
            return transform

        self.misses += 1
        transform = generate_trits(h, self.dim, self.denominator)
        # Shared between all callers, so it must stay immutable.
        transform.flags.writeable = False
        self._cache[h] = transform
        return transform

    def __contains__(self, key: str) -> bool:
        return fnv1_64(key) in self._cache

    def __len__(self) -> int:
        return len(self._cache)
