"""Persist one comparison into its ``<name1>-<name2>`` result directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Union

import numpy as np

from ..app.settings import ABSDIFF_HSV_NAME, ABSDIFF_RGB_NAME, INFO_NAME, MASK_NAME
from ..vision.divergence import DivergenceArtifacts
from ..vision.imageio import save_image
from .record import ComparisonResult, write_info

logger = logging.getLogger(__name__)


def result_directory(output_dir: Union[str, Path], result: ComparisonResult) -> Path:
    return Path(output_dir) / result.directory_name


def write_result(
    result: ComparisonResult,
    img1: np.ndarray,
    img2: np.ndarray,
    artifacts: DivergenceArtifacts,
    output_dir: Union[str, Path],
) -> Path:
    """Write the source images, the three artifacts and ``info.txt``.

    An existing result for the same pair is removed first, so nothing from a
    previous run survives.
    """

    result_dir = result_directory(output_dir, result)
    if result_dir.is_dir():
        logger.warning("Overwriting previous result in %s", result_dir)
        shutil.rmtree(result_dir)
    result_dir.mkdir(parents=True)

    file1, file2 = result.source_filenames
    save_image(result_dir / file1, img1)
    save_image(result_dir / file2, img2)
    save_image(result_dir / ABSDIFF_RGB_NAME, artifacts.absdiff_rgb)
    save_image(result_dir / ABSDIFF_HSV_NAME, artifacts.absdiff_hsv)
    save_image(result_dir / MASK_NAME, artifacts.mask)
    write_info(result_dir / INFO_NAME, result)
    logger.debug("Wrote result for %s to %s", result.directory_name, result_dir)
    return result_dir
