## pipeline.py

import logging
import time
from dataclasses import dataclass
from typing import Optional, TextIO

from clustering import AbstractClusterer, ClusterResult, KMeansClusterer
from config import (
    CLUSTER_PARAMS,
    CONFIG,
    PIPELINE_PARAMS,
    validate_chunk_size,
    validate_progress_every,
    validate_read_error_policy,
)
from context_window import ContextWindow
from encoder import ProjectionCache
from errors import StreamReadError
from storage import Accumulator, VectorSpace
from tokenizer import iter_chars, iter_tokens

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    count: int                          # Tokens completed and fed to the window
    vector_space: VectorSpace
    clusters: Optional[ClusterResult]   # None when clustering was skipped
    cache_size: int                     # Distinct pair-keys seen
    truncated: bool = False             # A read failure stopped the stream early
    elapsed: float = 0.0


class Pipeline:
    """
    Streams text into word vectors and hands them to a clusterer.

    A Pipeline owns the window, the projection cache and the word vectors
    of one run. Several streams can be fed through process_stream() before
    finish(); the window carries over between them.
    """

    def __init__(
        self,
        window_size: int = CONFIG['WINDOW_SIZE'],
        dim: int = CONFIG['VECTOR_DIM'],
        denominator: int = CONFIG['TRIT_DENOMINATOR'],
        clusterer: Optional[AbstractClusterer] = None,
        n_clusters: int = CLUSTER_PARAMS['N_CLUSTERS'],
        on_read_error: str = PIPELINE_PARAMS['ON_READ_ERROR'],
        chunk_size: int = PIPELINE_PARAMS['READ_CHUNK_CHARS'],
        progress_every: int = PIPELINE_PARAMS['PROGRESS_EVERY'],
        encoding: str = PIPELINE_PARAMS['ENCODING'],
        decode_errors: str = PIPELINE_PARAMS['DECODE_ERRORS'],
    ):
        self.window = ContextWindow(window_size)
        self.cache = ProjectionCache(dim, denominator)
        self.accumulator = Accumulator(self.cache)
        self.clusterer = clusterer if clusterer is not None else KMeansClusterer()
        self.n_clusters = n_clusters
        self.on_read_error = validate_read_error_policy(on_read_error)
        self.chunk_size = validate_chunk_size(chunk_size)
        self.progress_every = validate_progress_every(progress_every)
        self.encoding = encoding
        self.decode_errors = decode_errors

        self.count = 0
        self.truncated = False
        self._started = time.perf_counter()

    def feed(self, token: str) -> None:
        """Runs the window update for a completed token, then pushes it."""
        self.accumulator.update(self.window)
        self.window.push(token)
        self.count += 1

        if self.progress_every and self.count % self.progress_every == 0:
            logger.info(
                "Processed %d tokens (%d words, %d cached projections).",
                self.count, len(self.accumulator), len(self.cache),
            )

    def process_stream(self, stream: TextIO) -> int:
        """
        Feeds every completed token of `stream`. Returns the running token count.

        A read failure raises StreamReadError, or with the 'halt' policy stops
        here and keeps what has been accumulated so far.
        """
        try:
            for token in iter_tokens(iter_chars(stream, self.chunk_size)):
                self.feed(token)
        except StreamReadError as e:
            e.tokens_processed = self.count
            if self.on_read_error == 'raise':
                raise
            logger.warning("Stopping after %d tokens: %s", self.count, e)
            self.truncated = True
        return self.count

    def cluster(self, vector_space: VectorSpace, k: Optional[int] = None) -> ClusterResult:
        return self.clusterer.cluster(vector_space.matrix, self.n_clusters if k is None else k)

    def finish(self, cluster: bool = True) -> PipelineResult:
        """Finalizes the word vectors and, unless disabled, clusters them."""
        vector_space = self.accumulator.finalize()
        clusters = self.cluster(vector_space) if cluster else None

        result = PipelineResult(
            count=self.count,
            vector_space=vector_space,
            clusters=clusters,
            cache_size=len(self.cache),
            truncated=self.truncated,
            elapsed=time.perf_counter() - self._started,
        )
        logger.info("count=%d words=%d elapsed=%.3fs", result.count, len(vector_space), result.elapsed)
        return result

    def run(self, stream: TextIO, cluster: bool = True) -> PipelineResult:
        self.process_stream(stream)
        return self.finish(cluster=cluster)

    def run_file(self, path, cluster: bool = True) -> PipelineResult:
        logger.info("--- Building word vectors from %s ---", path)
        try:
            stream = open(path, 'r', encoding=self.encoding, errors=self.decode_errors)
        except OSError as e:
            raise StreamReadError(f"Could not open {path}: {e}", tokens_processed=self.count) from e
        with stream:
            return self.run(stream, cluster=cluster)
