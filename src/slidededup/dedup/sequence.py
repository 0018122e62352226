"""Adjacent-pair reduction over an ordered run of fingerprint results."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

from .hash import Fingerprint, FingerprintResult
from .distance import hamming_distance

T = TypeVar("T")


@dataclass(frozen=True)
class DuplicatePair:
    """Decision that the frame at earlier_index is superseded by its successor."""
    earlier_index: int
    later_index: int
    distance: int


def mark_adjacent_duplicates(
    results: Sequence[FingerprintResult],
    threshold: int
) -> Tuple[List[bool], List[DuplicatePair]]:
    """
    Single forward scan comparing each position to its predecessor.

    When both neighbours have a fingerprint and are within ``threshold``,
    the earlier one is flagged for removal. A run of similar frames therefore
    collapses to its last element. A failed fingerprint never takes part in
    a comparison, so it is always kept and never removes a neighbour.

    Args:
        results: Fingerprint results in capture order
        threshold: Maximum hamming distance for considering frames duplicates

    Returns:
        Keep flag per position, and the duplicate pairs that cleared a flag
    """
    keep = [True] * len(results)
    pairs: List[DuplicatePair] = []

    for i in range(1, len(results)):
        current, previous = results[i], results[i - 1]
        if not (isinstance(current, Fingerprint) and isinstance(previous, Fingerprint)):
            continue

        distance = hamming_distance(current, previous)
        if distance <= threshold:
            keep[i - 1] = False
            pairs.append(DuplicatePair(earlier_index=i - 1, later_index=i, distance=distance))

    return keep, pairs


def partition(items: Sequence[T], keep: Sequence[bool]) -> Tuple[List[T], List[T]]:
    """Split items into (kept, removed) by flag, preserving order."""
    if len(items) != len(keep):
        raise ValueError(f"Got {len(items)} items but {len(keep)} keep flags")

    kept: List[T] = []
    removed: List[T] = []
    for item, flag in zip(items, keep):
        (kept if flag else removed).append(item)
    return kept, removed
