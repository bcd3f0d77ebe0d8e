"""Application-level configuration."""

from .settings import (
    ABSDIFF_HSV_NAME,
    ABSDIFF_RGB_NAME,
    DEFAULT_DIVERGENCE_SETTINGS,
    DEFAULT_SSIM_SETTINGS,
    INFO_NAME,
    MASK_NAME,
    DivergenceSettings,
    SsimSettings,
)
