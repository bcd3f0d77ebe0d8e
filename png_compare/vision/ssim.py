"""Structural similarity (SSIM) scoring for single- and multi-channel images.

                (2*mu_x*mu_y + C1)(2*sigma_xy + C2)
  SSIM(x,y) = ---------------------------------------
              (mu_x^2 + mu_y^2 + C1)(sigma_x^2 + sigma_y^2 + C2)

Precondition failures (channel or size mismatches) are not raised out of the
scoring functions. They come back as a failed :class:`SsimOutcome` so callers
have to look at the outcome before trusting the number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..app.settings import DEFAULT_SSIM_SETTINGS, SsimSettings
from ..exceptions import (
    ChannelCountMismatchError,
    DimensionMismatchError,
    InvalidChannelCountError,
    PngCompareError,
)
from .imageio import channel_count
from .stats import local_stats

logger = logging.getLogger(__name__)

# Legacy score value for a failed comparison.
INVALID_SCORE = -1.0

_MAX_CHANNELS = 4


@dataclass(frozen=True, slots=True)
class SsimOutcome:
    """Either a similarity value or the precondition error that prevented it."""

    value: Optional[float] = None
    error: Optional[PngCompareError] = None

    @classmethod
    def success(cls, value: float) -> SsimOutcome:
        return cls(value=float(value))

    @classmethod
    def failure(cls, error: PngCompareError) -> SsimOutcome:
        logger.warning("SSIM not computed: %s", error)
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def score(self) -> float:
        """The value, or ``INVALID_SCORE`` when the comparison was rejected."""

        return self.value if self.error is None else INVALID_SCORE

    def unwrap(self) -> float:
        if self.error is not None:
            raise self.error
        return self.value


def _as_plane(image: np.ndarray) -> np.ndarray:
    if channel_count(image) != 1:
        raise InvalidChannelCountError(
            f"ssim_single_channel(): inputs should only have one channel, got {channel_count(image)}"
        )
    return image if image.ndim == 2 else image[..., 0]


def ssim_map(x: np.ndarray, y: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS) -> np.ndarray:
    """Return the per-pixel SSIM field of two single-channel images."""

    x_plane = _as_plane(x)
    y_plane = _as_plane(y)
    if x_plane.shape != y_plane.shape:
        raise DimensionMismatchError(
            f"ssim_single_channel(): inputs should be of same size, got {x_plane.shape} and {y_plane.shape}"
        )

    stats = local_stats(x_plane, y_plane, settings)
    mu_x_mu_y = stats.mu_x * stats.mu_y
    numerator = (2.0 * mu_x_mu_y + settings.c1) * (2.0 * stats.sigma_xy + settings.c2)
    denominator = (stats.mu_x * stats.mu_x + stats.mu_y * stats.mu_y + settings.c1) * (
        stats.sigma_x2 + stats.sigma_y2 + settings.c2
    )
    return numerator / denominator


def ssim_single_channel(
    x: np.ndarray, y: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS
) -> SsimOutcome:
    try:
        field = ssim_map(x, y, settings)
    except (InvalidChannelCountError, DimensionMismatchError) as exc:
        return SsimOutcome.failure(exc)
    return SsimOutcome.success(float(field.mean()))


def ssim_multi_channel(
    img1: np.ndarray, img2: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS
) -> SsimOutcome:
    """Score each channel independently and return the unweighted mean."""

    if img1.shape[:2] != img2.shape[:2]:
        return SsimOutcome.failure(
            DimensionMismatchError(
                f"ssim_multi_channel(): inputs should be of same size, got {img1.shape[:2]} and {img2.shape[:2]}"
            )
        )
    channels = channel_count(img1)
    if channels != channel_count(img2):
        return SsimOutcome.failure(
            ChannelCountMismatchError(
                f"ssim_multi_channel(): inputs should have same number of channels, got {channels} and {channel_count(img2)}"
            )
        )
    if not 1 <= channels <= _MAX_CHANNELS:
        return SsimOutcome.failure(
            InvalidChannelCountError(f"ssim_multi_channel(): expected 1 to {_MAX_CHANNELS} channels, got {channels}")
        )

    planes1 = img1[..., np.newaxis] if img1.ndim == 2 else img1
    planes2 = img2[..., np.newaxis] if img2.ndim == 2 else img2
    total = 0.0
    for index in range(channels):
        outcome = ssim_single_channel(planes1[..., index], planes2[..., index], settings)
        if not outcome.ok:
            return outcome
        total += outcome.value
    return SsimOutcome.success(total / channels)


def similarity_score(
    img1: np.ndarray, img2: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS
) -> SsimOutcome:
    """Multi-channel SSIM expressed as a percentage. Not clamped."""

    outcome = ssim_multi_channel(img1, img2, settings)
    if not outcome.ok:
        return outcome
    return SsimOutcome.success(100.0 * outcome.value)
