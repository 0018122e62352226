"""Distance metrics for fingerprint comparison."""

from .hash import Fingerprint


def hamming_distance(a: Fingerprint, b: Fingerprint) -> int:
    """
    Calculate Hamming distance between two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Hamming distance (number of differing bits)
    """
    return int(a.value - b.value)


def is_similar(a: Fingerprint, b: Fingerprint, threshold: int) -> bool:
    """True iff the fingerprints differ in at most ``threshold`` bits. 0 means exact match only."""
    return hamming_distance(a, b) <= threshold
