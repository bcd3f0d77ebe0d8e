"""Perceptual PNG comparison (SSIM + divergence artifacts) and result aggregation."""

__version__ = "1.0.0"
