## errors.py

"""Exception hierarchy for the random indexing pipeline."""


class RandomIndexingError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(RandomIndexingError, ValueError):
    """A parameter is outside the range the components can work with."""


class StreamReadError(RandomIndexingError):
    """
    Reading the character stream failed before end of input.

    tokens_processed records how many tokens were completed before the
    failure, so callers can tell how much of the input made it into the
    word vectors.
    """

    def __init__(self, message, tokens_processed=0):
        super().__init__(message)
        self.tokens_processed = tokens_processed


class ClusteringError(RandomIndexingError):
    """Clustering cannot produce k centroids from the given vectors."""
