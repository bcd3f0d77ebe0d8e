from __future__ import annotations

from pathlib import Path

import numpy as np

from png_compare.results.record import ComparisonResult, read_info
from png_compare.results.writer import result_directory, write_result
from png_compare.vision.divergence import render_divergence
from png_compare.vision.imageio import load_image


def _pair(rng: np.random.Generator):  # type: ignore[no-untyped-def]
    img1 = rng.integers(0, 256, size=(8, 9, 3)).astype(np.uint8)
    img2 = rng.integers(0, 256, size=(8, 9, 3)).astype(np.uint8)
    return img1, img2, render_divergence(img1, img2)


def test_write_result_creates_expected_files(tmp_path: Path, rng: np.random.Generator) -> None:
    img1, img2, artifacts = _pair(rng)
    result = ComparisonResult(name1="before", name2="after", score=42.0)
    directory = write_result(result, img1, img2, artifacts, tmp_path)

    assert directory == tmp_path / "before-after"
    assert sorted(p.name for p in directory.iterdir()) == [
        "absdiff_hsv.png",
        "absdiff_rgb.png",
        "after_rgb.png",
        "before_rgb.png",
        "info.txt",
        "threshold_mask.png",
    ]
    np.testing.assert_array_equal(load_image(directory / "before_rgb.png"), img1)
    np.testing.assert_array_equal(load_image(directory / "absdiff_rgb.png"), artifacts.absdiff_rgb)
    assert load_image(directory / "threshold_mask.png").shape == (8, 9, 1)
    assert read_info(directory / "info.txt").to_result() == result


def test_rerun_replaces_previous_result(tmp_path: Path, rng: np.random.Generator, caplog) -> None:  # type: ignore[no-untyped-def]
    img1, img2, artifacts = _pair(rng)
    first = ComparisonResult(name1="a", name2="b", score=10.0)
    directory = write_result(first, img1, img2, artifacts, tmp_path)
    (directory / "stale.txt").write_text("left over", encoding="utf-8")

    second = ComparisonResult(name1="a", name2="b", score=90.0)
    with caplog.at_level("WARNING"):
        assert write_result(second, img1, img2, artifacts, tmp_path) == directory

    assert not (directory / "stale.txt").exists()
    assert read_info(directory / "info.txt").score == 90.0
    assert "Overwriting previous result" in caplog.text
    assert result_directory(tmp_path, second) == directory
