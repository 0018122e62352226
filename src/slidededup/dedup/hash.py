"""Perceptual fingerprint computation for captured slide frames."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import imagehash
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)

HASH_SIZE = 8


@dataclass(frozen=True)
class Fingerprint:
    """64-bit horizontal gradient hash of an image."""
    value: imagehash.ImageHash

    @property
    def bit_length(self) -> int:
        return self.value.hash.size

    @classmethod
    def from_hex(cls, hex_str: str) -> "Fingerprint":
        return cls(imagehash.hex_to_hash(hex_str))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FingerprintFailure:
    """An image that could not be fingerprinted, and why."""
    path: Union[str, Path]
    cause: str


FingerprintResult = Union[Fingerprint, FingerprintFailure]


def _fingerprint_image(img: Image.Image) -> Fingerprint:
    width, height = img.size
    if width == 0 or height == 0:
        raise ValueError(f"zero-dimension image ({width}x{height})")

    # Palette, alpha and grayscale captures all hash from the same 8-bit RGB raster
    if img.mode != 'RGB':
        img = img.convert('RGB')

    return Fingerprint(imagehash.dhash(img, hash_size=HASH_SIZE))


def compute_fingerprint(image_path: Union[str, Path]) -> FingerprintResult:
    """
    Load an image from disk and compute its fingerprint.

    Decode problems are returned, not raised: a missing file, unreadable or
    unsupported bytes, or a zero-dimension raster all produce a
    FingerprintFailure carrying the path and the underlying cause.

    Args:
        image_path: Path to image file

    Returns:
        Fingerprint on success, FingerprintFailure otherwise
    """
    try:
        with Image.open(image_path) as img:
            fingerprint = _fingerprint_image(img)
    except Exception as exc:
        logger.warning(f"Failed to fingerprint {image_path}: {exc}")
        return FingerprintFailure(path=image_path, cause=f"{type(exc).__name__}: {exc}")

    logger.debug(f"Computed fingerprint for {image_path}: {fingerprint}")
    return fingerprint
