from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from png_compare.cli.compare import main
from png_compare.results.record import read_info


def test_compare_writes_result_and_prints_score(
    tmp_path: Path,
    write_png: Callable[[str, np.ndarray], Path],
    rng: np.random.Generator,
    capsys: pytest.CaptureFixture[str],
) -> None:
    image = rng.integers(0, 256, size=(20, 24, 3)).astype(np.uint8)
    left = write_png("inputs/left.png", image)
    right = write_png("inputs/right.png", image)
    output = tmp_path / "out"

    assert main([str(left), str(right), str(output)]) == 0

    printed = capsys.readouterr().out
    assert f"Creating directory {output}" in printed
    assert "Computing SSIM..." in printed
    assert "Computing deltas..." in printed
    assert printed.rstrip().endswith("Similarity: 100.00")
    record = read_info(output / "left-right" / "info.txt")
    assert (record.name1, record.name2) == ("left", "right")
    assert record.score == pytest.approx(100.0)


def test_compare_requires_three_arguments(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "a.png"), str(tmp_path / "b.png")]) == 1
    assert "Usage: png-compare" in capsys.readouterr().err


def test_compare_rejects_mismatched_sizes(
    tmp_path: Path, write_png: Callable[[str, np.ndarray], Path]
) -> None:
    left = write_png("left.png", np.zeros((10, 10, 3), np.uint8))
    right = write_png("right.png", np.zeros((10, 12, 3), np.uint8))
    output = tmp_path / "out"

    assert main([str(left), str(right), str(output)]) == 1
    assert not (output / "left-right").exists()


def test_compare_reports_unreadable_input(tmp_path: Path) -> None:
    assert main([str(tmp_path / "nope.png"), str(tmp_path / "nope2.png"), str(tmp_path / "out")]) == 1


def test_rerun_replaces_result_directory(
    tmp_path: Path, write_png: Callable[[str, np.ndarray], Path], rng: np.random.Generator
) -> None:
    base = rng.integers(0, 256, size=(16, 16, 3)).astype(np.uint8)
    left = write_png("left.png", base)
    right = write_png("right.png", base)
    output = tmp_path / "out"
    assert main([str(left), str(right), str(output)]) == 0
    (output / "left-right" / "leftover.png").write_bytes(b"x")

    write_png("right.png", 255 - base)
    assert main([str(left), str(right), str(output)]) == 0

    assert not (output / "left-right" / "leftover.png").exists()
    assert read_info(output / "left-right" / "info.txt").score < 100.0
