"""Filter a result tree by score and copy the survivors."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, List, Optional, Sequence, Union

from ..aggregate.materializer import CopyAction, materialize
from ..aggregate.options import ALL_DIFF_FLAGS, DiffFlag, ScoreFilter
from ..aggregate.selection import filter_results

logger = logging.getLogger(__name__)


def run_aggregation(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path],
    score_filter: ScoreFilter = ScoreFilter.LESS,
    threshold: float = 100.0,
    diff_flags: AbstractSet[DiffFlag] = ALL_DIFF_FLAGS,
    exclude_inputs: bool = False,
    dry_run: bool = False,
    command: Optional[Sequence[str]] = None,
) -> List[CopyAction]:
    selection = filter_results(
        input_dir,
        score_filter=score_filter,
        threshold=threshold,
        diff_flags=diff_flags,
        exclude_inputs=exclude_inputs,
    )
    logger.debug(
        "Aggregating with filter=%s threshold=%s flags=%s exclude_inputs=%s",
        score_filter.value,
        threshold,
        sorted(flag.value for flag in diff_flags),
        exclude_inputs,
    )
    return materialize(selection, output_dir, dry_run=dry_run, command=command)
