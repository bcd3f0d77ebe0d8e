"""Pillow-backed image decode/encode helpers.

Images are handled as ``uint8`` numpy arrays laid out ``(height, width, channels)``,
including single-channel images, so the channel count is always ``shape[2]``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..exceptions import ImageLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_NATIVE_MODES = {"L", "LA", "RGB", "RGBA"}
_CONVERTED_MODES = {"1": "L", "PA": "RGBA", "CMYK": "RGB", "YCbCr": "RGB", "HSV": "RGB"}


def channel_count(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else int(image.shape[2])


def load_image(path: PathLike) -> np.ndarray:
    """Decode ``path`` into an 8-bit ``(H, W, C)`` array with 1 to 4 channels."""

    try:
        with Image.open(path) as image:
            image.load()
            native = _to_native_mode(image)
    except (OSError, ValueError) as exc:
        raise ImageLoadError(f"Unable to read image '{path}': {exc}") from exc
    array = np.asarray(native, dtype=np.uint8)
    if array.ndim == 2:
        array = array[..., np.newaxis]
    logger.debug("Loaded %s as %s (%s)", path, array.shape, native.mode)
    return array


def save_image(path: PathLike, image: np.ndarray) -> Path:
    target = Path(path)
    array = np.ascontiguousarray(image, dtype=np.uint8)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[..., 0]
    Image.fromarray(array).save(target)
    return target


def _to_native_mode(image: Image.Image) -> Image.Image:
    if image.mode in _NATIVE_MODES:
        return image
    if image.mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    target = _CONVERTED_MODES.get(image.mode)
    if target is None:
        raise ImageLoadError(f"Unsupported image mode '{image.mode}': only 8-bit channels are supported")
    return image.convert(target)
