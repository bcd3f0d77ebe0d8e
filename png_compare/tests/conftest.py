from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from png_compare.app.settings import INFO_NAME
from png_compare.results.record import ComparisonResult, write_info


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[[str, np.ndarray], Path]:
    def _write(name: str, array: np.ndarray) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        data = np.ascontiguousarray(array, dtype=np.uint8)
        if data.ndim == 3 and data.shape[2] == 1:
            data = data[..., 0]
        Image.fromarray(data).save(path)
        return path

    return _write


@pytest.fixture
def make_result_dir() -> Callable[..., Path]:
    """Create a minimal ``<name1>-<name2>`` result directory with placeholder artifacts."""

    def _make(root: Path, name1: str, name2: str, score: float) -> Path:
        result = ComparisonResult(name1=name1, name2=name2, score=score)
        directory = root / result.directory_name
        directory.mkdir(parents=True)
        for filename in (*result.source_filenames, "absdiff_rgb.png", "absdiff_hsv.png", "threshold_mask.png"):
            (directory / filename).write_bytes(filename.encode("utf-8"))
        write_info(directory / INFO_NAME, result)
        return directory

    return _make
