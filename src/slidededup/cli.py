from pathlib import Path
import re
import shutil
from typing import List, Optional

import typer

from .config import ConfigError, Settings, load_settings
from .logging import get_logger
from .dedup.model import ReductionResult, deduplicate_batch
from .output.report import build_report, write_report_json

app = typer.Typer(help="slidededup – drop near-duplicate consecutive slide captures", no_args_is_help=True)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}


def _natural_key(path: Path):
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", path.name)]


def collect_frames(images_dir: Path) -> List[Path]:
    """Image files directly inside images_dir, in capture (natural filename) order."""
    frames = [
        path for path in images_dir.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    ]
    return sorted(frames, key=_natural_key)


def _free_target(destination: Path, name: str) -> Path:
    """destination/name, or destination/stem_N.suffix when that name is taken."""
    target = destination / name
    counter = 1
    while target.exists():
        target = destination / f"{Path(name).stem}_{counter}{Path(name).suffix}"
        counter += 1
    return target


def move_removed(result: ReductionResult, destination: Path) -> List[Path]:
    """Move removed frames into destination. Frames are never deleted or overwritten."""
    destination.mkdir(parents=True, exist_ok=True)
    moved = []
    for path in result.removed:
        target = _free_target(destination, Path(path).name)
        shutil.move(str(path), str(target))
        moved.append(target)
    return moved


@app.command()
def dedup(
    images_dir: Path = typer.Argument(..., exists=True, file_okay=False, dir_okay=True, help="Directory of captured slide frames"),
    threshold: Optional[int] = typer.Option(None, "--threshold", "-t", min=0, help="Maximum hamming distance between consecutive frames to treat them as duplicates"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False, help="Application JSON config holding enable_image_dedup and dedup_threshold"),
    enabled: Optional[bool] = typer.Option(None, "--dedup/--no-dedup", help="Override the enable_image_dedup setting"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Fingerprinting threads (default: CPU count)"),
    report: Optional[Path] = typer.Option(None, "--report", "-r", dir_okay=False, help="Write a JSON report of the run"),
    move_to: Optional[Path] = typer.Option(None, "--move-removed", file_okay=False, help="Move removed frames into this directory"),
) -> None:
    """
    Collapse runs of near-identical consecutive frames in IMAGES_DIR.

    Frames are taken in natural filename order. Within each run of similar
    neighbours only the last frame is kept. Frames that cannot be decoded
    are always kept.
    """
    logger = get_logger(__name__)

    try:
        settings = load_settings(config) if config is not None else Settings()
        settings = Settings(
            enable_image_dedup=settings.enable_image_dedup if enabled is None else enabled,
            dedup_threshold=settings.dedup_threshold if threshold is None else threshold,
            max_workers=workers if workers is not None else settings.max_workers,
        )
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc

    frames = collect_frames(images_dir)
    if not frames:
        logger.warning(f"No image files found in {images_dir}")

    result = deduplicate_batch(frames, settings)

    try:
        if report is not None:
            write_report_json(build_report(result, settings.dedup_threshold, str(images_dir)), report)
        if move_to is not None and result.removed:
            moved = move_removed(result, move_to)
            logger.info(f"Moved {len(moved)} removed frames to {move_to}")
    except OSError as exc:
        logger.error(f"Failed to write results: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo("Deduplication complete")
    typer.echo(f"Frames: {result.total}")
    typer.echo(f"Kept: {len(result.kept)}")
    typer.echo(f"Removed: {len(result.removed)}")
    typer.echo(f"Unreadable (kept): {len(result.failures)}")
    if not settings.enable_image_dedup:
        typer.echo("Deduplication disabled; all frames kept")
    for path in result.removed:
        typer.echo(f"  - {Path(path).name}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
