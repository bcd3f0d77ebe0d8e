"""Similarity scoring and divergence rendering over 8-bit images."""

from .divergence import DivergenceArtifacts, render_divergence, threshold_mask
from .imageio import channel_count, load_image, save_image
from .ssim import INVALID_SCORE, SsimOutcome, similarity_score, ssim_map, ssim_multi_channel, ssim_single_channel
from .stats import LocalStats, local_mean, local_stats

__all__ = [
    "DivergenceArtifacts",
    "render_divergence",
    "threshold_mask",
    "channel_count",
    "load_image",
    "save_image",
    "INVALID_SCORE",
    "SsimOutcome",
    "similarity_score",
    "ssim_map",
    "ssim_multi_channel",
    "ssim_single_channel",
    "LocalStats",
    "local_mean",
    "local_stats",
]
