"""Compare one image pair and persist the result directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from ..app.settings import (
    DEFAULT_DIVERGENCE_SETTINGS,
    DEFAULT_SSIM_SETTINGS,
    DivergenceSettings,
    SsimSettings,
)
from ..exceptions import OutputDirectoryCreateError
from ..results.record import ComparisonResult
from ..results.writer import write_result
from ..vision.divergence import render_divergence
from ..vision.imageio import load_image
from ..vision.ssim import similarity_score

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def ensure_output_dir(output_dir: Path) -> None:
    if output_dir.is_dir():
        return
    print(f"Creating directory {output_dir}")
    try:
        output_dir.mkdir(parents=True)
    except OSError as exc:
        raise OutputDirectoryCreateError(f"Failed to create output directory {output_dir}: {exc}") from exc


def run_comparison(
    image1: PathLike,
    image2: PathLike,
    output_dir: PathLike,
    ssim_settings: SsimSettings = DEFAULT_SSIM_SETTINGS,
    divergence_settings: DivergenceSettings = DEFAULT_DIVERGENCE_SETTINGS,
) -> ComparisonResult:
    """Score ``image1`` against ``image2`` and write ``<output_dir>/<name1>-<name2>``.

    Raises the precondition error when the images cannot be compared; no
    result directory is written in that case.
    """

    path1 = Path(image1)
    path2 = Path(image2)
    target = Path(output_dir)
    ensure_output_dir(target)

    img1 = load_image(path1)
    img2 = load_image(path2)

    print("Computing SSIM...")
    score = similarity_score(img1, img2, ssim_settings).unwrap()

    print("Computing deltas...")
    artifacts = render_divergence(img1, img2, divergence_settings)
    result = ComparisonResult(name1=path1.stem, name2=path2.stem, score=score)
    write_result(result, img1, img2, artifacts, target)
    logger.debug("Similarity of %s and %s: %.6f", path1, path2, score)
    print("Done.")
    return result
