"""Gaussian-weighted local statistics used by SSIM."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from skimage.filters import gaussian

from ..app.settings import DEFAULT_SSIM_SETTINGS, SsimSettings


@dataclass(frozen=True, slots=True)
class LocalStats:
    """Local means, variances and covariance of two fields, all shaped like the inputs."""

    mu_x: np.ndarray
    mu_y: np.ndarray
    sigma_x2: np.ndarray
    sigma_y2: np.ndarray
    sigma_xy: np.ndarray


def local_mean(field: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS) -> np.ndarray:
    """Convolve ``field`` with the settings' Gaussian window.

    Borders are mirrored without repeating the edge sample (``dcb|abcd|cba``),
    and the kernel is truncated at ``settings.radius``.
    """

    return gaussian(
        np.asarray(field, dtype=np.float64),
        sigma=settings.sigma,
        mode="mirror",
        truncate=settings.radius / settings.sigma,
        preserve_range=True,
    )


def local_stats(x: np.ndarray, y: np.ndarray, settings: SsimSettings = DEFAULT_SSIM_SETTINGS) -> LocalStats:
    # Samples stay in their native 0-255 range.
    xf = np.asarray(x, dtype=np.float64)
    yf = np.asarray(y, dtype=np.float64)

    mu_x = local_mean(xf, settings)
    mu_y = local_mean(yf, settings)
    return LocalStats(
        mu_x=mu_x,
        mu_y=mu_y,
        sigma_x2=local_mean(xf * xf, settings) - mu_x * mu_x,
        sigma_y2=local_mean(yf * yf, settings) - mu_y * mu_y,
        sigma_xy=local_mean(xf * yf, settings) - mu_x * mu_y,
    )
