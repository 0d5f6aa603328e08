"""Domain modules for the API client."""

from .cache_keys import build_cache_key, is_cacheable, is_mutating
from .classification import ErrorClassification, TransportFailureKind, classify
from .invalidation import partitions_for_path

__all__ = [
    "ErrorClassification",
    "TransportFailureKind",
    "build_cache_key",
    "classify",
    "is_cacheable",
    "is_mutating",
    "partitions_for_path",
]
