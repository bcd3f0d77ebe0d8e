"""End-to-end comparison and aggregation runs."""

from .aggregation import run_aggregation
from .comparison import run_comparison
