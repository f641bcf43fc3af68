"""Tests for the season folder task."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mediatidy.ingestion import DirectorySnapshotter
from mediatidy.tasks import SeasonizeTask, TaskResult, format_season_dir
from mediatidy.tasks.seasonize import is_season_dir
from mediatidy.walker import TreeWalker

SNAPSHOTTER = DirectorySnapshotter(video_extensions=["mkv", "mp4"])


def _touch(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text(name, encoding="utf-8")


@pytest.mark.parametrize(
    ("template", "season", "expected"),
    [
        ("Season XX", 3, "Season 03"),
        ("Season XX", 12, "Season 12"),
        ("Season X", 12, "Season 12"),
        ("S XXX", 7, "S 007"),
        ("XX - Season XX", 4, "04 - Season 04"),
        ("Specials", 0, "Specials"),
    ],
)
def test_format_season_dir(template: str, season: int, expected: str) -> None:
    assert format_season_dir(template, season) == expected


def test_is_season_dir_matches_rendered_names() -> None:
    assert is_season_dir("Season XX", "Season 01")
    assert is_season_dir("Season XX", "Season 123")
    assert not is_season_dir("Season XX", "Season One")
    assert not is_season_dir("Season XX", "My Show")


def test_seasonize_moves_files_and_reports_change(tmp_path: Path) -> None:
    show = tmp_path / "Show"
    _touch(show, "Show.S01E01.mkv", "Show.S01E02.mkv", "Show.S02E01.mp4", "trailer.mkv")
    task = SeasonizeTask("Season XX")

    result = task.run(show, SNAPSHOTTER.snapshot(show))

    assert result is TaskResult.FILES_CHANGED
    assert sorted(p.name for p in (show / "Season 01").iterdir()) == [
        "Show.S01E01.mkv",
        "Show.S01E02.mkv",
    ]
    assert [p.name for p in (show / "Season 02").iterdir()] == ["Show.S02E01.mp4"]
    assert (show / "trailer.mkv").exists()


def test_seasonize_second_run_is_noop(tmp_path: Path) -> None:
    show = tmp_path / "Show"
    _touch(show, "Show.S01E01.mkv")
    task = SeasonizeTask("Season XX")

    first = task.run(show, SNAPSHOTTER.snapshot(show))
    second = task.run(show, SNAPSHOTTER.snapshot(show))

    assert first is TaskResult.FILES_CHANGED
    assert second is TaskResult.OK


def test_seasonize_leaves_season_folders_alone(tmp_path: Path) -> None:
    season = tmp_path / "Show" / "Season 01"
    _touch(season, "Show.S01E01.mkv", "Show.S02E01.mkv")

    result = SeasonizeTask("Season XX").run(season, SNAPSHOTTER.snapshot(season))

    assert result is TaskResult.OK
    assert sorted(p.name for p in season.iterdir()) == ["Show.S01E01.mkv", "Show.S02E01.mkv"]


def test_seasonize_dry_run_does_not_touch_files(tmp_path: Path) -> None:
    show = tmp_path / "Show"
    _touch(show, "Show.S01E01.mkv")

    result = SeasonizeTask("Season XX", dry_run=True).run(show, SNAPSHOTTER.snapshot(show))

    assert result is TaskResult.OK
    assert (show / "Show.S01E01.mkv").exists()
    assert not (show / "Season 01").exists()


def test_seasonize_reports_error_on_conflict(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    show = tmp_path / "Show"
    _touch(show, "Show.S01E01.mkv")
    _touch(show / "Season 01", "Show.S01E01.mkv")
    snapshot = SNAPSHOTTER.snapshot(show)

    with caplog.at_level(logging.ERROR, logger="mediatidy"):
        result = SeasonizeTask("Season XX").run(show, snapshot)

    assert result is TaskResult.ERROR
    assert (show / "Show.S01E01.mkv").exists()
    assert "Failed to seasonize" in caplog.text


def test_seasonize_reports_error_when_source_vanished(tmp_path: Path) -> None:
    show = tmp_path / "Show"
    _touch(show, "Show.S01E01.mkv")
    snapshot = SNAPSHOTTER.snapshot(show)
    (show / "Show.S01E01.mkv").unlink()

    assert SeasonizeTask("Season XX").run(show, snapshot) is TaskResult.ERROR


def test_walker_seasonizes_whole_library(tmp_path: Path) -> None:
    library = tmp_path / "tv"
    _touch(library / "Alpha", "Alpha.S01E01.mkv", "Alpha.S02E01.mkv")
    _touch(library / "Beta", "Beta.1x01.mkv")
    _touch(library / "Beta" / "Season 01", "Beta.S01E02.mkv")

    walker = TreeWalker([SeasonizeTask("Season XX")], snapshotter=SNAPSHOTTER, max_workers=4)
    report = walker.walk([library])

    assert report.ok
    assert (library / "Alpha" / "Season 01" / "Alpha.S01E01.mkv").exists()
    assert (library / "Alpha" / "Season 02" / "Alpha.S02E01.mkv").exists()
    assert sorted(p.name for p in (library / "Beta" / "Season 01").iterdir()) == [
        "Beta.1x01.mkv",
        "Beta.S01E02.mkv",
    ]
    assert set(report.visited) == {
        library,
        library / "Alpha",
        library / "Alpha" / "Season 01",
        library / "Alpha" / "Season 02",
        library / "Beta",
        library / "Beta" / "Season 01",
    }
