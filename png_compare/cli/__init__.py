from __future__ import annotations

import argparse
import logging

from ..exceptions import UsageError

LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that leaves the exit code to ``main``."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
