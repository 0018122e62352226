"""Public API for sequential slide deduplication."""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from ..config import Settings
from ..logging import get_logger
from .hash import FingerprintFailure, FingerprintResult, compute_fingerprint
from .sequence import mark_adjacent_duplicates, partition

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class RemovedFrame:
    """A removed frame together with the successor that replaced it."""
    path: PathLike
    kept_neighbor: PathLike
    distance: int


@dataclass(frozen=True)
class ReductionResult:
    """Outcome of one deduplication run. Unpacks as ``kept, removed``."""
    kept: List[PathLike]
    removed: List[PathLike]
    failures: List[FingerprintFailure] = field(default_factory=list)
    pairs: List[RemovedFrame] = field(default_factory=list)

    def __iter__(self) -> Iterator[List[PathLike]]:
        return iter((self.kept, self.removed))

    @property
    def total(self) -> int:
        return len(self.kept) + len(self.removed)


def compute_fingerprints(
    image_paths: Sequence[PathLike],
    max_workers: Optional[int] = None
) -> List[FingerprintResult]:
    """
    Fingerprint every path, returning results in input order.

    Work is spread over a thread pool sized to the CPU count; decoding and
    resizing in Pillow release the GIL. Returns only once every result is in.
    """
    if not image_paths:
        return []

    workers = max_workers or os.cpu_count() or 1
    workers = min(workers, len(image_paths))

    if workers == 1:
        return [compute_fingerprint(path) for path in image_paths]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(compute_fingerprint, image_paths))


def deduplicate(
    image_paths: Sequence[PathLike],
    threshold: int,
    max_workers: Optional[int] = None,
) -> ReductionResult:
    """
    Collapse runs of near-identical consecutive frames to their last frame.

    Only immediate neighbours are compared. A frame that cannot be
    fingerprinted is always kept and never causes a neighbour's removal.

    Args:
        image_paths: Captured frames in timeline order
        threshold: Maximum hamming distance for considering frames duplicates
        max_workers: Fingerprinting pool size, defaults to the CPU count

    Returns:
        ReductionResult whose kept and removed lists preserve input order

    Raises:
        ValueError: If threshold is negative
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise ValueError(f"threshold must be a non-negative integer, got {threshold!r}")

    image_paths = list(image_paths)
    if not image_paths:
        return ReductionResult(kept=[], removed=[])

    logger.info(f"Deduplicating {len(image_paths)} frames (threshold: {threshold})")

    results = compute_fingerprints(image_paths, max_workers=max_workers)
    failures = [result for result in results if isinstance(result, FingerprintFailure)]

    keep, duplicate_pairs = mark_adjacent_duplicates(results, threshold)
    kept, removed = partition(image_paths, keep)

    pairs = []
    for pair in duplicate_pairs:
        earlier = image_paths[pair.earlier_index]
        later = image_paths[pair.later_index]
        logger.debug(f"Dropping {earlier}: similar to {later} (distance: {pair.distance})")
        pairs.append(RemovedFrame(path=earlier, kept_neighbor=later, distance=pair.distance))

    logger.info(
        f"Deduplication complete: kept {len(kept)}, removed {len(removed)}, "
        f"unfingerprinted {len(failures)}"
    )
    return ReductionResult(kept=kept, removed=removed, failures=failures, pairs=pairs)


def deduplicate_batch(image_paths: Sequence[PathLike], settings: Settings) -> ReductionResult:
    """Run deduplication as configured; with dedup disabled every frame is kept untouched."""
    if not settings.enable_image_dedup:
        logger.info("Image deduplication disabled, keeping all frames")
        return ReductionResult(kept=list(image_paths), removed=[])

    return deduplicate(image_paths, settings.dedup_threshold, max_workers=settings.max_workers)
