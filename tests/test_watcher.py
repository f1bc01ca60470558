from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ariasense.types import SnapshotError
from ariasense.watcher import LintEventHandler


@dataclass
class _Event:
    src_path: str
    is_directory: bool = False


def test_should_handle_filters_by_suffix_and_hidden_paths(tmp_path: Path) -> None:
    handler = LintEventHandler(lambda paths: None)
    assert handler.should_handle(str(tmp_path / "page.json"))
    assert handler.should_handle(str(tmp_path / "page.HTML"))
    assert not handler.should_handle(str(tmp_path / "notes.txt"))
    assert not handler.should_handle(str(tmp_path / ".cache" / "page.json"))


def test_single_file_watch_ignores_siblings(tmp_path: Path) -> None:
    target = tmp_path / "page.json"
    handler = LintEventHandler(lambda paths: None, only=target)
    assert handler.should_handle(str(target))
    assert not handler.should_handle(str(tmp_path / "other.json"))


def test_changes_are_debounced(tmp_path: Path, capsys) -> None:
    calls = []
    handler = LintEventHandler(calls.append, delay=60)
    event = _Event(str(tmp_path / "page.json"))

    handler.on_modified(event)
    handler.on_modified(event)
    handler.on_created(_Event(str(tmp_path / "other.json")))
    handler.on_modified(_Event(str(tmp_path), is_directory=True))

    assert calls == [[event.src_path]]
    assert "[watch] Change detected in" in capsys.readouterr().out


def test_lint_failures_are_reported_not_raised(tmp_path: Path, capsys) -> None:
    def failing(paths):
        raise SnapshotError("Invalid tree snapshot")

    handler = LintEventHandler(failing, delay=0)
    handler.on_modified(_Event(str(tmp_path / "page.json")))
    assert "[error] Lint failed: Invalid tree snapshot" in capsys.readouterr().out
