"""Copy an aggregation selection into an output tree."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from ..app.settings import COMMAND_NAME
from ..exceptions import CopyFailedError, DestinationCreateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CopyAction:
    source: Path
    target: Path


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationCreateError(f"Failed to create output directory {directory}: {exc}") from exc


def _copy(source: Path, target: Path) -> None:
    try:
        if source.is_dir():
            shutil.copytree(source, target, dirs_exist_ok=True)
        else:
            shutil.copy2(source, target)
    except OSError as exc:
        # shutil.Error subclasses OSError
        raise CopyFailedError(f"Failed to copy {source} to {target}: {exc}") from exc


def write_command(output_dir: Path, command: Sequence[str]) -> Path:
    path = output_dir / COMMAND_NAME
    path.write_text("Command used: " + " ".join(command) + "\n", encoding="utf-8")
    return path


def materialize(
    selection: Mapping[Path, Sequence[str]],
    output_dir: Union[str, Path],
    dry_run: bool = False,
    command: Optional[Sequence[str]] = None,
) -> List[CopyAction]:
    """Copy every selected file to ``output_dir/<result dir name>/``.

    Existing files are overwritten. With ``dry_run`` the planned directory
    creations and copies are only printed, and nothing on disk changes.
    Returns the copy actions that were performed (or planned).
    """

    root = Path(output_dir)
    actions: List[CopyAction] = []
    for source_dir, filenames in selection.items():
        source_dir = Path(source_dir)
        target_dir = root / source_dir.name
        if not target_dir.is_dir():
            if dry_run:
                print(f"Create directory {target_dir}")
            else:
                _ensure_directory(target_dir)
        for filename in filenames:
            action = CopyAction(source=source_dir / filename, target=target_dir / filename)
            if dry_run:
                print(f"Copy {action.source} to {action.target}")
                actions.append(action)
                continue
            if not action.source.exists():
                logger.warning("Source file %s is missing; skipped", action.source)
                continue
            _copy(action.source, action.target)
            actions.append(action)

    if not dry_run:
        _ensure_directory(root)
        write_command(root, sys.argv if command is None else command)
        logger.info("Copied %d file(s) into %s", len(actions), root)
    return actions
