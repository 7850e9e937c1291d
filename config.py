## config.py

from errors import ConfigurationError

# --- 1. CORE ARCHITECTURE ---
CONFIG = {
    'WINDOW_SIZE': 17,          # Capacity (W) of the context window, must be odd
    'VECTOR_DIM': 1024,         # Dimensionality (D) of projection and word vectors
    'TRIT_DENOMINATOR': 6,      # P(+1) = P(-1) = 1/denominator, P(0) = the rest
}

# --- 2. CLUSTERING PARAMETERS ---
CLUSTER_PARAMS = {
    'N_CLUSTERS': 1000,         # Target cluster count (k)
    'MAX_ITERATIONS': 1,        # Assign/update rounds; 1 is a single pass
    'DISTANCE': 'manhattan',    # 'manhattan' or 'euclidean'
    'RANDOM_SEED': 42,          # Seed for centroid initialization
}

# --- 3. PIPELINE PARAMETERS ---
PIPELINE_PARAMS = {
    'READ_CHUNK_CHARS': 65536,  # Characters pulled from the stream per read
    'PROGRESS_EVERY': 100000,   # Log progress every N tokens (0 disables)
    'ON_READ_ERROR': 'raise',   # 'raise' -> StreamReadError, 'halt' -> keep partial result
    'ENCODING': 'utf-8',
    'DECODE_ERRORS': 'replace', # Undecodable bytes become U+FFFD, which splits words
}

READ_ERROR_POLICIES = ('raise', 'halt')


def validate_window_size(size):
    """The center slot is size // 2, so only odd capacities have a true middle."""
    if not isinstance(size, int) or isinstance(size, bool) or size < 1 or size % 2 == 0:
        raise ConfigurationError(f"Window size must be a positive odd integer, got {size!r}")
    return size


def validate_dimension(dim):
    if not isinstance(dim, int) or isinstance(dim, bool) or dim < 1:
        raise ConfigurationError(f"Vector dimension must be a positive integer, got {dim!r}")
    return dim


def validate_denominator(denominator):
    # Two outcomes are reserved for +1 and -1, at least one for 0.
    if not isinstance(denominator, int) or isinstance(denominator, bool) or denominator < 3:
        raise ConfigurationError(f"Trit denominator must be an integer >= 3, got {denominator!r}")
    return denominator


def validate_read_error_policy(policy):
    if policy not in READ_ERROR_POLICIES:
        raise ConfigurationError(
            f"Unknown read error policy {policy!r}, expected one of {READ_ERROR_POLICIES}"
        )
    return policy


def validate_chunk_size(chunk_size):
    # A zero-sized read returns '' and would look like end of input.
    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size < 1:
        raise ConfigurationError(f"Read chunk size must be a positive integer, got {chunk_size!r}")
    return chunk_size


def validate_progress_every(progress_every):
    if not isinstance(progress_every, int) or isinstance(progress_every, bool) or progress_every < 0:
        raise ConfigurationError(f"progress_every must be a non-negative integer, got {progress_every!r}")
    return progress_every
