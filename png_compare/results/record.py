"""The ``info.txt`` record shared between comparison and aggregation.

Layout: two double-quoted filenames followed by the score, space separated,
newline terminated::

    "left_rgb.png" "right_rgb.png" 97.4128

Inside the quotes ``"`` and ``\\`` are escaped with a backslash.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from ..app.settings import SOURCE_SUFFIX
from ..exceptions import MalformedResultFileError, MissingResultFileError

_TOKEN = re.compile(r'\s*(?:"((?:[^"\\]|\\.)*)"|([^\s"]+))', re.DOTALL)
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Score of one image pair, keyed by the stems of the two source files."""

    name1: str
    name2: str
    score: float

    @property
    def directory_name(self) -> str:
        return f"{self.name1}-{self.name2}"

    @property
    def source_filenames(self) -> Tuple[str, str]:
        return f"{self.name1}{SOURCE_SUFFIX}", f"{self.name2}{SOURCE_SUFFIX}"


@dataclass(frozen=True, slots=True)
class InfoRecord:
    """A parsed ``info.txt``: the stored source filenames and the score."""

    filename1: str
    filename2: str
    score: float

    @property
    def name1(self) -> str:
        return _stem(self.filename1)

    @property
    def name2(self) -> str:
        return _stem(self.filename2)

    def to_result(self) -> ComparisonResult:
        return ComparisonResult(name1=self.name1, name2=self.name2, score=self.score)


def _stem(filename: str) -> str:
    if filename.endswith(SOURCE_SUFFIX):
        return filename[: -len(SOURCE_SUFFIX)]
    return Path(filename).stem


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_info(result: ComparisonResult) -> str:
    file1, file2 = result.source_filenames
    # repr() is the shortest string that parses back to the same float.
    return f"{_quote(file1)} {_quote(file2)} {float(result.score)!r}\n"


def parse_info(text: str, source: Optional[Path] = None) -> InfoRecord:
    where = f" in {source}" if source is not None else ""
    names = []
    pos = 0
    for _ in range(2):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise MalformedResultFileError(f"Expected a quoted filename{where} at offset {pos}")
        quoted, bare = match.groups()
        names.append(_ESCAPED.sub(r"\1", quoted) if quoted is not None else bare)
        pos = match.end()

    rest = text[pos:].split()
    if not rest:
        raise MalformedResultFileError(f"Missing score{where}")
    try:
        score = float(rest[0])
    except ValueError as exc:
        raise MalformedResultFileError(f"Invalid score {rest[0]!r}{where}") from exc
    if math.isnan(score):
        raise MalformedResultFileError(f"Invalid score {rest[0]!r}{where}")
    return InfoRecord(filename1=names[0], filename2=names[1], score=score)


def write_info(path: Union[str, Path], result: ComparisonResult) -> Path:
    target = Path(path)
    target.write_text(format_info(result), encoding="utf-8")
    return target


def read_info(path: Union[str, Path]) -> InfoRecord:
    source = Path(path)
    if not source.is_file():
        raise MissingResultFileError(f"Couldn't find {source}")
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingResultFileError(f"Failed to open file {source}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedResultFileError(f"Failed to read file {source}: {exc}") from exc
    return parse_info(text, source)
