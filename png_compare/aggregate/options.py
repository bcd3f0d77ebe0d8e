"""Aggregation options: which artifacts to carry and which scores to keep."""

from __future__ import annotations

import enum
import logging
from typing import FrozenSet, Iterable, Union

from ..app.settings import ABSDIFF_HSV_NAME, ABSDIFF_RGB_NAME, MASK_NAME
from ..exceptions import InvalidFilterOptionError

logger = logging.getLogger(__name__)


class DiffFlag(enum.Enum):
    RGB = "rgb"
    HSV = "hsv"
    MASK = "mask"

    @property
    def artifact_name(self) -> str:
        return _ARTIFACTS[self]


_ARTIFACTS = {
    DiffFlag.RGB: ABSDIFF_RGB_NAME,
    DiffFlag.HSV: ABSDIFF_HSV_NAME,
    DiffFlag.MASK: MASK_NAME,
}

ALL_DIFF_FLAGS: FrozenSet[DiffFlag] = frozenset(DiffFlag)


def parse_diff_flags(raw: Union[str, Iterable[str]]) -> FrozenSet[DiffFlag]:
    """Parse a comma separated list (or iterable) of diff flag names.

    Unknown tokens are warned about and ignored. When nothing valid remains
    the full set is returned: asking for no artifacts means asking for all of
    them.
    """

    tokens = raw.split(",") if isinstance(raw, str) else list(raw)
    flags = set()
    for token in tokens:
        key = str(token).strip().lower()
        if not key:
            continue
        try:
            flags.add(DiffFlag(key))
        except ValueError:
            logger.warning("Invalid diff flag option %r", token)
    if not flags:
        logger.info("No valid diff flags requested; including %s", ",".join(f.value for f in DiffFlag))
        return ALL_DIFF_FLAGS
    return frozenset(flags)


class ScoreFilter(enum.Enum):
    """Direction of the threshold test. Both directions include the threshold itself."""

    LESS = "less"
    MORE = "more"

    @classmethod
    def parse(cls, raw: str) -> ScoreFilter:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise InvalidFilterOptionError(f"Invalid score filter {raw!r} (expected one of: {choices})") from None

    def accepts(self, score: float, threshold: float) -> bool:
        if self is ScoreFilter.LESS:
            return score <= threshold
        return score >= threshold
