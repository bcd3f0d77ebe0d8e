"""Scan a directory of comparison results and pick what to carry forward."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, Dict, List, Union

from ..app.settings import INFO_NAME
from ..exceptions import InvalidDirectoryError, MalformedResultFileError, MissingResultFileError
from ..results.record import InfoRecord, read_info
from ..vision.ssim import INVALID_SCORE
from .options import ALL_DIFF_FLAGS, DiffFlag, ScoreFilter

logger = logging.getLogger(__name__)

# Result directory -> filenames to copy, in copy order.
Selection = Dict[Path, List[str]]


def select_files(record: InfoRecord, diff_flags: AbstractSet[DiffFlag], exclude_inputs: bool) -> List[str]:
    files = [INFO_NAME]
    files.extend(flag.artifact_name for flag in DiffFlag if flag in diff_flags)
    if not exclude_inputs:
        files.extend((record.filename1, record.filename2))
    return files


def filter_results(
    input_dir: Union[str, Path],
    score_filter: ScoreFilter = ScoreFilter.LESS,
    threshold: float = 100.0,
    diff_flags: AbstractSet[DiffFlag] = ALL_DIFF_FLAGS,
    exclude_inputs: bool = False,
) -> Selection:
    """Return the result directories of ``input_dir`` whose score passes the filter.

    Entries that are not directories are ignored. Directories whose
    ``info.txt`` is missing or malformed are reported and skipped, as are
    records carrying the failed-comparison score.
    """

    root = Path(input_dir)
    if not root.is_dir():
        raise InvalidDirectoryError(f"Invalid directory: {root}")

    selection: Selection = {}
    for entry in sorted(root.iterdir()):
        if not entry.is_dir():
            continue
        try:
            record = read_info(entry / INFO_NAME)
        except (MissingResultFileError, MalformedResultFileError) as exc:
            logger.warning("Skipping %s: %s", entry.name, exc)
            continue
        if record.score == INVALID_SCORE:
            logger.warning("Skipping %s: recorded score marks a failed comparison", entry.name)
            continue
        if not score_filter.accepts(record.score, threshold):
            logger.debug("Filtered out %s (score %s)", entry.name, record.score)
            continue
        selection[entry] = select_files(record, diff_flags, exclude_inputs)
    logger.info("Selected %d result(s) from %s", len(selection), root)
    return selection
