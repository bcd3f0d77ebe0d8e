"""Score-based filtering and re-export of comparison results."""

from .materializer import CopyAction, materialize, write_command
from .options import ALL_DIFF_FLAGS, DiffFlag, ScoreFilter, parse_diff_flags
from .selection import Selection, filter_results, select_files
