"""Absolute-difference images and the HSV divergence mask."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from skimage.color import rgb2hsv

from ..app.settings import DEFAULT_DIVERGENCE_SETTINGS, DivergenceSettings
from ..exceptions import ChannelCountMismatchError, DimensionMismatchError
from .imageio import channel_count

logger = logging.getLogger(__name__)

_HUE_RANGE = 180.0
_SATURATION_VALUE_RANGE = 255.0


@dataclass(frozen=True, slots=True)
class DivergenceArtifacts:
    absdiff_rgb: np.ndarray
    absdiff_hsv: np.ndarray
    mask: np.ndarray


def to_rgb(image: np.ndarray) -> np.ndarray:
    """Project a 1-4 channel image onto RGB: gray is replicated, alpha is dropped."""

    channels = channel_count(image)
    planes = image[..., np.newaxis] if image.ndim == 2 else image
    if channels in (1, 2):
        return np.repeat(planes[..., :1], 3, axis=2)
    return planes[..., :3]


def to_hsv(rgb: np.ndarray) -> np.ndarray:
    """Convert 8-bit RGB to 8-bit HSV with hue in half-degrees (0-179) and S, V in 0-255."""

    hsv = rgb2hsv(np.asarray(rgb, dtype=np.uint8))
    hue = np.rint(hsv[..., 0] * _HUE_RANGE) % _HUE_RANGE
    sat_val = np.rint(hsv[..., 1:] * _SATURATION_VALUE_RANGE)
    return np.concatenate([hue[..., np.newaxis], sat_val], axis=2).astype(np.uint8)


def absdiff(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.abs(a.astype(np.int16) - b.astype(np.int16)).astype(np.uint8)


def threshold_mask(diff: np.ndarray, threshold: float = DEFAULT_DIVERGENCE_SETTINGS.mask_threshold) -> np.ndarray:
    """Flag (255) every pixel whose channel-difference magnitude is strictly above ``threshold``."""

    magnitude = np.sqrt(np.sum(np.square(diff.astype(np.float64)), axis=2))
    return np.where(magnitude > threshold, 255, 0).astype(np.uint8)


def render_divergence(
    img1: np.ndarray,
    img2: np.ndarray,
    settings: DivergenceSettings = DEFAULT_DIVERGENCE_SETTINGS,
) -> DivergenceArtifacts:
    """Render the RGB/HSV absolute differences and the binary mask of two images.

    Both images must share width, height and channel count. Images without
    exactly three channels are projected onto RGB first (see :func:`to_rgb`),
    so all artifacts are 3-channel except the single-channel mask.
    """

    if img1.shape[:2] != img2.shape[:2]:
        raise DimensionMismatchError(f"render_divergence(): sizes differ, {img1.shape[:2]} vs {img2.shape[:2]}")
    if channel_count(img1) != channel_count(img2):
        raise ChannelCountMismatchError(
            f"render_divergence(): channel counts differ, {channel_count(img1)} vs {channel_count(img2)}"
        )
    if channel_count(img1) != 3:
        logger.debug("Projecting %d-channel images onto RGB before rendering", channel_count(img1))

    rgb1 = to_rgb(img1)
    rgb2 = to_rgb(img2)
    absdiff_hsv = absdiff(to_hsv(rgb1), to_hsv(rgb2))
    return DivergenceArtifacts(
        absdiff_rgb=absdiff(rgb1, rgb2),
        absdiff_hsv=absdiff_hsv,
        mask=threshold_mask(absdiff_hsv, settings.mask_threshold),
    )
