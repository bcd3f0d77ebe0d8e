"""Per-pair result records and result directories."""

from .record import ComparisonResult, InfoRecord, format_info, parse_info, read_info, write_info
from .writer import result_directory, write_result
