"""Sequential perceptual deduplication of captured slide frames."""

from .model import deduplicate, deduplicate_batch, ReductionResult, RemovedFrame
from .hash import Fingerprint, FingerprintFailure, FingerprintResult, compute_fingerprint
from .distance import hamming_distance, is_similar
from .sequence import DuplicatePair, mark_adjacent_duplicates, partition

__all__ = [
    "deduplicate",
    "deduplicate_batch",
    "ReductionResult",
    "RemovedFrame",
    "Fingerprint",
    "FingerprintFailure",
    "FingerprintResult",
    "compute_fingerprint",
    "hamming_distance",
    "is_similar",
    "DuplicatePair",
    "mark_adjacent_duplicates",
    "partition",
]
