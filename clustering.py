## clustering.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np
from scipy.spatial.distance import cdist

from config import CLUSTER_PARAMS
from errors import ClusteringError, ConfigurationError

logger = logging.getLogger(__name__)

# Metric name -> scipy cdist metric
DISTANCE_METRICS = {
    'euclidean': 'euclidean',
    'manhattan': 'cityblock',
}


@dataclass
class ClusterResult:
    centroids: np.ndarray   # (k, D)
    labels: np.ndarray      # (N,) index of the nearest centroid per input row
    iterations: int
    converged: bool

    @property
    def k(self) -> int:
        return self.centroids.shape[0]


# --- 1. ABSTRACT INTERFACE ---
class AbstractClusterer(ABC):
    """
    Contract for whatever consumes the finished word vectors.
    Implementations must return exactly k centroids or raise ClusteringError.
    """

    @abstractmethod
    def cluster(self, vectors: Any, k: int) -> ClusterResult:
        pass


# --- 2. K-MEANS / K-MEDIANS ---
class KMeansClusterer(AbstractClusterer):
    """
    Lloyd-style clustering with a selectable distance.

    Euclidean distance updates centroids with the mean of their members,
    Manhattan distance with the coordinate-wise median. Initial centroids
    are k distinct input rows picked by a seeded generator, so a given input
    always clusters the same way.
    """

    def __init__(
        self,
        distance: str = CLUSTER_PARAMS['DISTANCE'],
        max_iterations: int = CLUSTER_PARAMS['MAX_ITERATIONS'],
        seed: int = CLUSTER_PARAMS['RANDOM_SEED'],
    ):
        if distance not in DISTANCE_METRICS:
            raise ClusteringError(
                f"Unsupported distance {distance!r}, expected one of {sorted(DISTANCE_METRICS)}"
            )
        if not isinstance(max_iterations, int) or max_iterations < 1:
            raise ConfigurationError(f"max_iterations must be a positive integer, got {max_iterations!r}")

        self.distance = distance
        self.metric = DISTANCE_METRICS[distance]
        self.max_iterations = max_iterations
        self.seed = seed

    def _update_centroid(self, members: np.ndarray) -> np.ndarray:
        if self.distance == 'manhattan':
            return np.median(members, axis=0)
        return members.mean(axis=0)

    def _check_input(self, vectors: Any, k: int) -> np.ndarray:
        try:
            data = np.asarray(vectors, dtype=np.float64)
        except ValueError as e:
            raise ClusteringError(f"Vectors must share one dimension: {e}") from e
        if data.ndim != 2:
            raise ClusteringError(f"Expected a 2-D array of vectors, got shape {data.shape}")
        n = data.shape[0]
        if n == 0:
            raise ClusteringError("Cannot cluster an empty set of vectors")
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
            raise ClusteringError(f"Cluster count must be a positive integer, got {k!r}")
        if k > n:
            raise ClusteringError(f"Cannot form {k} clusters from {n} vectors")
        return data

    def cluster(self, vectors: Any, k: int) -> ClusterResult:
        data = self._check_input(vectors, k)
        n = data.shape[0]

        rnd = np.random.default_rng(self.seed)
        centroids = data[rnd.choice(n, size=k, replace=False)].copy()

        labels = None
        converged = False
        iterations = 0
        while iterations < self.max_iterations:
            iterations += 1

            # 1. Assignment
            new_labels = cdist(data, centroids, metric=self.metric).argmin(axis=1)
            if labels is not None and np.array_equal(new_labels, labels):
                converged = True
                break
            labels = new_labels

            # 2. Update; an empty cluster keeps its previous centroid
            for j in range(k):
                members = data[labels == j]
                if len(members):
                    centroids[j] = self._update_centroid(members)

        logger.info(
            "Clustered %d vectors into %d clusters (%s, %d iterations, converged=%s).",
            n, k, self.distance, iterations, converged,
        )
        return ClusterResult(centroids=centroids, labels=labels, iterations=iterations, converged=converged)
