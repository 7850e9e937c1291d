"""
Tests for the window-pair accumulation rule and the finalized vector space.
"""

import numpy as np
import pytest

from context_window import ContextWindow
from storage import Accumulator, VectorSpace

from conftest import SMALL_DIM, RecordingCache, filled_window


def expected_sum(cache, keys):
    total = np.zeros(cache.dim, dtype=np.int64)
    for key in keys:
        total += cache.lookup(key)
    return total


class TestWindowUpdate:
    """A single update against a known window."""

    def test_pairs_skip_center_but_advance_last(self, accumulator, reference_cache):
        window = filled_window(["the", "cat", "sat", "on", "mat"])

        center = accumulator.update(window)

        assert center == "sat"
        # "cat"+"sat" is skipped; the next pair starts from "sat", not "cat".
        expected = expected_sum(reference_cache, ["thecat", "saton", "onmat"])
        np.testing.assert_array_equal(accumulator.vector("sat"), expected)

    def test_every_slot_equal_to_center_is_skipped(self, accumulator, reference_cache):
        window = filled_window(["a", "b", "a", "c", "a"])

        accumulator.update(window)

        expected = expected_sum(reference_cache, ["ab", "ac"])
        np.testing.assert_array_equal(accumulator.vector("a"), expected)

    def test_pair_keys_are_last_then_current(self, accumulator, reference_cache):
        window = filled_window(["p", "q", "r"], size=3)

        accumulator.update(window)

        np.testing.assert_array_equal(accumulator.vector("q"), reference_cache.lookup("qr"))
        assert "rq" not in accumulator.cache

    def test_update_does_not_push(self, accumulator):
        window = filled_window(["the", "cat", "sat", "on", "mat"])
        before = list(window)

        accumulator.update(window)

        assert list(window) == before

    def test_repeated_centers_accumulate(self, accumulator, reference_cache):
        window = filled_window(["x", "y", "w", "y", "x"])
        accumulator.update(window)
        accumulator.update(window)

        expected = 2 * expected_sum(reference_cache, ["xy", "wy", "yx"])
        np.testing.assert_array_equal(accumulator.vector("w"), expected)
        assert accumulator.updates == 2


class TestWarmUp:
    """
    Before the window fills, the empty token is the center and a context
    token like any other. Kept as-is even though it gives "" a vector.
    """

    def test_empty_window_contributes_nothing(self, accumulator):
        accumulator.update(ContextWindow(5))

        assert accumulator.vocabulary() == [""]
        assert not accumulator.vector("").any()
        assert len(accumulator.cache) == 0

    def test_first_real_token_pairs_with_empty(self, accumulator, reference_cache):
        window = filled_window(["a"])

        accumulator.update(window)

        np.testing.assert_array_equal(accumulator.vector(""), reference_cache.lookup("a"))


class TestStreamAccumulation:
    """Updating before every push, the way the pipeline drives it."""

    def feed(self, accumulator, tokens, size=5):
        window = ContextWindow(size)
        for token in tokens:
            accumulator.update(window)
            window.push(token)
        return window

    def test_word_vector_sums_every_window_it_centered(self, accumulator, reference_cache):
        tokens = ["red", "fish", "blue", "fish", "one", "fish", "two", "fish", "end"]
        self.feed(accumulator, tokens)

        # "blue" is the center exactly once, when the window holds tokens[0:5].
        expected = expected_sum(reference_cache, ["redfish", "bluefish", "fishone"])
        np.testing.assert_array_equal(accumulator.vector("blue"), expected)

        assert "fish" in accumulator

    def test_cache_holds_exactly_the_keys_constructed(self):
        cache = RecordingCache(dim=SMALL_DIM)
        accumulator = Accumulator(cache)
        text = "the cat sat on the mat and the dog sat on the cat".split()

        self.feed(accumulator, text)

        assert len(cache) == len(cache.keys)
        assert cache.misses == len(cache.keys)

    def test_rerunning_keys_does_not_grow_cache(self):
        cache = RecordingCache(dim=SMALL_DIM)
        tokens = "a b c d e f g".split()

        self.feed(Accumulator(cache), tokens)
        size = len(cache)
        self.feed(Accumulator(cache), tokens)

        assert len(cache) == size


class TestFinalize:

    def test_vector_space_is_float_copy(self, accumulator):
        accumulator.update(filled_window(["the", "cat", "sat", "on", "mat"]))
        accumulator.update(filled_window(["a", "b", "c", "d", "e"]))

        space = accumulator.finalize()

        assert isinstance(space, VectorSpace)
        assert space.words == ["sat", "c"]
        assert space.matrix.dtype == np.float64
        assert space.matrix.shape == (2, SMALL_DIM)
        assert space.dim == SMALL_DIM
        np.testing.assert_array_equal(space.vector("sat"), accumulator.vector("sat").astype(np.float64))

    def test_as_dict_and_contains(self, accumulator):
        accumulator.update(filled_window(["a", "b", "c", "d", "e"]))
        space = accumulator.finalize()

        assert "c" in space
        assert "z" not in space
        assert set(space.as_dict()) == {"c"}
        assert len(space) == 1

    def test_empty_accumulator(self, accumulator):
        space = accumulator.finalize()

        assert len(space) == 0
        assert space.matrix.shape == (0, SMALL_DIM)

    def test_unknown_word_raises(self, accumulator):
        with pytest.raises(KeyError):
            accumulator.vector("missing")


class TestVectorSpaceLookup:

    def test_vector_by_word(self):
        space = VectorSpace(words=["a", "b", "c"], matrix=np.arange(6, dtype=np.float64).reshape(3, 2))

        np.testing.assert_array_equal(space.vector("c"), [4.0, 5.0])
        np.testing.assert_array_equal(space.vector("a"), [0.0, 1.0])
        assert "b" in space
        assert "d" not in space

    def test_unknown_word(self):
        space = VectorSpace(words=["a"], matrix=np.zeros((1, 2)))

        with pytest.raises(KeyError):
            space.vector("z")
