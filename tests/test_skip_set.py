from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dsync.errors import PathAccessError
from dsync.manifest.skip import SkipSet, WalkDecision, read_skip_file


def test_skip_lines_are_trimmed_and_blank_lines_ignored() -> None:
    skip = SkipSet.from_lines(["build", "", "   ", "  node_modules  ", "\t.git\t", "build"])
    assert skip.names == frozenset({"build", "node_modules", ".git"})
    assert len(skip) == 3


def test_decide_prunes_only_members() -> None:
    skip = SkipSet.from_lines(["build"])
    assert skip.should_prune("build") is True
    assert skip.decide("build") is WalkDecision.PRUNE
    assert skip.decide("builds") is WalkDecision.DESCEND
    assert skip.decide("Build") is WalkDecision.DESCEND
    assert "build" in skip


def test_empty_skip_set_never_prunes() -> None:
    assert SkipSet().decide("anything") is WalkDecision.DESCEND


def test_read_skip_file(tmp_path: Path) -> None:
    skip_file = tmp_path / "skip.txt"
    skip_file.write_text("build\n\n.cache\r\nvendor")
    assert read_skip_file(skip_file).names == frozenset({"build", ".cache", "vendor"})


def test_path_like_entry_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="dsync.manifest.skip"):
        skip = SkipSet.from_lines(["a/build"])
    assert "a/build" in skip
    assert any("never matches" in record.getMessage() for record in caplog.records)


def test_missing_skip_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PathAccessError):
        read_skip_file(tmp_path / "nope.txt")
