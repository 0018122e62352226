"""
JSON report of a deduplication run.

The report records which frames were kept, which were removed and why,
and which could not be fingerprinted, so a batch can be audited after
the removed frames have left the export.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from ..dedup.model import ReductionResult
from ..logging import get_logger

logger = get_logger(__name__)

REPORT_VERSION = "1.0"


@dataclass(frozen=True)
class DedupReport:
    """Serializable summary of one deduplication run."""
    version: str                            # Report format version
    source: str                             # Directory or batch the frames came from
    created_at: str                         # When the run finished
    threshold: int                          # Hamming distance bound used
    total: int                              # Number of input frames
    kept: List[str]                         # Kept frames, capture order
    removed: List[str]                      # Removed frames, capture order
    failed: List[Dict[str, str]]            # Frames that could not be fingerprinted
    pairs: List[Dict[str, Any]]             # Removal decisions with distances

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def build_report(result: ReductionResult, threshold: int, source: str) -> DedupReport:
    """Build a report from a deduplication result."""
    failed = [
        {"path": str(failure.path), "cause": failure.cause}
        for failure in result.failures
    ]
    pairs = [
        {
            "removed": str(pair.path),
            "kept_neighbor": str(pair.kept_neighbor),
            "distance": pair.distance,
        }
        for pair in result.pairs
    ]

    return DedupReport(
        version=REPORT_VERSION,
        source=str(source),
        created_at=datetime.now().isoformat(),
        threshold=threshold,
        total=result.total,
        kept=[str(path) for path in result.kept],
        removed=[str(path) for path in result.removed],
        failed=failed,
        pairs=pairs,
    )


def write_report_json(report: DedupReport, report_path: Path) -> Path:
    """
    Write report to a JSON file.

    Args:
        report: DedupReport to write
        report_path: Destination file; parent directories are created

    Returns:
        Path to the written report file
    """
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(report_path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote dedup report to {report_path}")
        return report_path

    except Exception as exc:
        logger.error(f"Failed to write dedup report to {report_path}: {exc}")
        raise


def load_report_json(report_path: Path) -> DedupReport:
    """Load a report previously written by write_report_json."""
    try:
        with open(report_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        report = DedupReport(**data)
        logger.info(f"Loaded dedup report from {report_path} covering {report.total} frames")
        return report

    except Exception as exc:
        logger.error(f"Failed to load dedup report from {report_path}: {exc}")
        raise
