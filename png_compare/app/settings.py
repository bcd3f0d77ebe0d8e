# png_compare/app/settings.py
from __future__ import annotations

from dataclasses import dataclass

# Fixed artifact names inside a result directory.
INFO_NAME = "info.txt"
ABSDIFF_RGB_NAME = "absdiff_rgb.png"
ABSDIFF_HSV_NAME = "absdiff_hsv.png"
MASK_NAME = "threshold_mask.png"
COMMAND_NAME = "command.txt"
SOURCE_SUFFIX = "_rgb.png"


@dataclass(frozen=True, slots=True)
class SsimSettings:
    """Gaussian window and stabilizing constants for 8-bit SSIM.

    The defaults are the 11x11, sigma 1.5 window and C = (K * L)^2 constants
    recommended for 8-bit photographic content. They are not exposed on the
    command line; tests may pass a different instance.
    """

    window_size: int = 11
    sigma: float = 1.5
    c1: float = 6.5025  # (0.01 * 255) ** 2
    c2: float = 58.5225  # (0.03 * 255) ** 2

    def __post_init__(self) -> None:
        if self.window_size < 1 or self.window_size % 2 == 0:
            raise ValueError(f"window_size must be a positive odd number, got {self.window_size}")
        if self.sigma <= 0:
            raise ValueError(f"sigma must be positive, got {self.sigma}")

    @property
    def radius(self) -> int:
        return self.window_size // 2


@dataclass(frozen=True, slots=True)
class DivergenceSettings:
    """Per-pixel HSV distance above which the mask flags a pixel."""

    mask_threshold: float = 25.0


DEFAULT_SSIM_SETTINGS = SsimSettings()
DEFAULT_DIVERGENCE_SETTINGS = DivergenceSettings()
