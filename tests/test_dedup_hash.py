"""Tests for fingerprint computation."""

from pathlib import Path
import pytest
from PIL import Image
import imagehash

from slidededup.dedup.hash import (
    compute_fingerprint, _fingerprint_image, Fingerprint, FingerprintFailure, HASH_SIZE
)
from slidededup.dedup.distance import hamming_distance
from tests.helpers.slide_factory import make_gradient_slide


class TestComputeFingerprint:
    def test_compute_fingerprint_basic(self, tmp_path):
        """Test fingerprint computation for a simple image."""
        img_path = make_gradient_slide(tmp_path / "slide.png")

        result = compute_fingerprint(img_path)

        assert isinstance(result, Fingerprint)
        assert isinstance(result.value, imagehash.ImageHash)
        assert result.bit_length == HASH_SIZE * HASH_SIZE == 64

    def test_accepts_string_paths(self, tmp_path):
        img_path = make_gradient_slide(tmp_path / "slide.png")

        assert isinstance(compute_fingerprint(str(img_path)), Fingerprint)

    def test_gradient_bits(self, tmp_path):
        """Ascending ramps set every gradient bit, descending ramps clear them."""
        up = compute_fingerprint(make_gradient_slide(tmp_path / "up.png", ascending=True))
        down = compute_fingerprint(make_gradient_slide(tmp_path / "down.png", ascending=False))

        assert str(up) == "ffffffffffffffff"
        assert str(down) == "0000000000000000"
        assert hamming_distance(up, down) == 64

    def test_same_pixels_same_fingerprint(self, tmp_path):
        """Test that fingerprinting is deterministic across files and calls."""
        path1 = make_gradient_slide(tmp_path / "a.png", mark=(45, 30))
        path2 = make_gradient_slide(tmp_path / "b.png", mark=(45, 30))

        first = compute_fingerprint(path1)
        again = compute_fingerprint(path1)
        copy = compute_fingerprint(path2)

        assert first == again == copy

    def test_minor_change_stays_close(self, tmp_path):
        """A small mark on an otherwise unchanged slide moves few bits."""
        plain = compute_fingerprint(make_gradient_slide(tmp_path / "plain.png"))
        marked = compute_fingerprint(make_gradient_slide(tmp_path / "marked.png", mark=(45, 30)))

        assert hamming_distance(plain, marked) <= 5

    def test_reencoded_capture_stays_close(self, tmp_path):
        png = compute_fingerprint(make_gradient_slide(tmp_path / "slide.png"))
        jpg = compute_fingerprint(make_gradient_slide(tmp_path / "slide.jpg"))

        assert isinstance(jpg, Fingerprint)
        assert hamming_distance(png, jpg) <= 5

    def test_different_modes(self, tmp_path):
        """Test fingerprinting of non-RGB captures."""
        rgba_path = tmp_path / "rgba.png"
        Image.new('RGBA', (50, 50), color=(255, 0, 0, 128)).save(rgba_path)

        gray_path = tmp_path / "gray.png"
        Image.new('L', (50, 50), color=128).save(gray_path)

        palette_path = tmp_path / "palette.gif"
        Image.new('RGB', (50, 50), color='blue').convert('P').save(palette_path)

        for path in (rgba_path, gray_path, palette_path):
            assert isinstance(compute_fingerprint(path), Fingerprint)

    def test_does_not_modify_input(self, tmp_path):
        img_path = make_gradient_slide(tmp_path / "slide.png")
        before = img_path.read_bytes()

        compute_fingerprint(img_path)

        assert img_path.read_bytes() == before


class TestFingerprintFailures:
    def test_nonexistent_file(self, tmp_path):
        """Test that a missing file is reported, not raised."""
        missing = tmp_path / "missing.png"

        result = compute_fingerprint(missing)

        assert isinstance(result, FingerprintFailure)
        assert result.path == missing
        assert "FileNotFoundError" in result.cause

    def test_corrupted_file(self, tmp_path):
        corrupted = tmp_path / "corrupted.png"
        corrupted.write_bytes(b"not an image")

        result = compute_fingerprint(corrupted)

        assert isinstance(result, FingerprintFailure)
        assert result.path == corrupted
        assert result.cause

    def test_truncated_file(self, tmp_path):
        """A capture cut off mid-download fails to decode."""
        full = make_gradient_slide(tmp_path / "full.png", size=(400, 300))
        data = full.read_bytes()
        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(data[: len(data) // 2])

        assert isinstance(compute_fingerprint(truncated), FingerprintFailure)

    def test_directory_is_failure(self, tmp_path):
        assert isinstance(compute_fingerprint(tmp_path), FingerprintFailure)

    def test_zero_dimension_image(self, tmp_path, monkeypatch):
        """A raster with no width decodes but cannot be fingerprinted."""
        monkeypatch.setattr(Image, "open", lambda path: Image.new('RGB', (0, 10)))

        result = compute_fingerprint(tmp_path / "empty.png")

        assert isinstance(result, FingerprintFailure)
        assert "zero-dimension image (0x10)" in result.cause

    def test_zero_dimension_raster_rejected(self):
        with pytest.raises(ValueError, match="zero-dimension"):
            _fingerprint_image(Image.new('RGB', (10, 0)))


class TestFingerprint:
    def test_fingerprint_immutable(self):
        fingerprint = Fingerprint.from_hex("00000000000000ff")

        with pytest.raises(AttributeError):
            fingerprint.value = imagehash.hex_to_hash("ffffffffffffffff")  # type: ignore

    def test_from_hex_round_trip(self):
        fingerprint = Fingerprint.from_hex("0123456789abcdef")

        assert str(fingerprint) == "0123456789abcdef"
        assert fingerprint.bit_length == 64

    def test_equality(self):
        assert Fingerprint.from_hex("00000000000000ff") == Fingerprint.from_hex("00000000000000ff")
        assert Fingerprint.from_hex("00000000000000ff") != Fingerprint.from_hex("00000000000000fe")

    def test_failure_is_not_a_fingerprint(self):
        failure = FingerprintFailure(path=Path("x.png"), cause="boom")

        assert not isinstance(failure, Fingerprint)
        with pytest.raises(AttributeError):
            failure.cause = "other"  # type: ignore
