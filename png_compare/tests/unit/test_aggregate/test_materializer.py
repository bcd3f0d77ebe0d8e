from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List

import pytest

from png_compare.aggregate import materializer
from png_compare.aggregate.materializer import materialize
from png_compare.exceptions import CopyFailedError


def _snapshot(root: Path) -> List[str]:
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


@pytest.fixture
def selection(tmp_path: Path, make_result_dir: Callable[..., Path]) -> Dict[Path, List[str]]:
    source = make_result_dir(tmp_path / "results", "a", "b", 12.0)
    return {source: ["info.txt", "absdiff_hsv.png", "a_rgb.png"]}


def test_selected_files_are_copied(tmp_path: Path, selection: Dict[Path, List[str]]) -> None:
    output = tmp_path / "out"
    actions = materialize(selection, output, command=["png-aggregate", "-i", "results", "-o", "out"])

    target = output / "a-b"
    assert sorted(p.name for p in target.iterdir()) == ["a_rgb.png", "absdiff_hsv.png", "info.txt"]
    assert (target / "a_rgb.png").read_bytes() == b"a_rgb.png"
    assert [action.target for action in actions] == [target / name for name in selection[next(iter(selection))]]
    assert (output / "command.txt").read_text(encoding="utf-8") == "Command used: png-aggregate -i results -o out\n"


def test_existing_files_are_overwritten(tmp_path: Path, selection: Dict[Path, List[str]]) -> None:
    output = tmp_path / "out"
    (output / "a-b").mkdir(parents=True)
    (output / "a-b" / "info.txt").write_text("old", encoding="utf-8")
    materialize(selection, output, command=["png-aggregate"])
    assert (output / "a-b" / "info.txt").read_text(encoding="utf-8").startswith('"a_rgb.png"')


def test_dry_run_touches_nothing(
    tmp_path: Path, selection: Dict[Path, List[str]], capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "out"
    before = _snapshot(tmp_path)
    actions = materialize(selection, output, dry_run=True, command=["png-aggregate"])

    assert _snapshot(tmp_path) == before
    assert not output.exists()
    assert len(actions) == 3
    printed = capsys.readouterr().out
    assert f"Create directory {output / 'a-b'}" in printed
    assert "Copy " in printed and "absdiff_hsv.png" in printed


def test_missing_source_file_is_skipped(
    tmp_path: Path, selection: Dict[Path, List[str]], caplog: pytest.LogCaptureFixture
) -> None:
    source = next(iter(selection))
    (source / "absdiff_hsv.png").unlink()
    with caplog.at_level("WARNING"):
        actions = materialize(selection, tmp_path / "out", command=["png-aggregate"])
    assert len(actions) == 2
    assert "absdiff_hsv.png" in caplog.text


def test_empty_selection_still_records_command(tmp_path: Path) -> None:
    output = tmp_path / "out"
    assert materialize({}, output, command=["png-aggregate", "--threshold", "5"]) == []
    assert (output / "command.txt").read_text(encoding="utf-8") == "Command used: png-aggregate --threshold 5\n"


def test_failed_copy_raises_copy_error(
    tmp_path: Path, selection: Dict[Path, List[str]], monkeypatch: pytest.MonkeyPatch
) -> None:
    def _refuse(source: Path, target: Path) -> None:
        raise PermissionError(13, "Permission denied", str(target))

    monkeypatch.setattr(materializer.shutil, "copy2", _refuse)
    output = tmp_path / "out"
    with pytest.raises(CopyFailedError, match="info.txt"):
        materialize(selection, output, command=["png-aggregate"])
    assert not (output / "command.txt").exists()
