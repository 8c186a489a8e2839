from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dsync.config import DEFAULT_CHUNK_SIZE, build_config, default_chunk_size
from dsync.manifest.skip import SkipSet
from dsync.runtime import resolve_log_level


def test_default_chunk_size(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DSYNC_HASH_CHUNK_BYTES", raising=False)
    assert default_chunk_size() == DEFAULT_CHUNK_SIZE
    monkeypatch.setenv("DSYNC_HASH_CHUNK_BYTES", " 4096 ")
    assert default_chunk_size() == 4096


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_invalid_chunk_size_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("DSYNC_HASH_CHUNK_BYTES", raw)
    with pytest.raises(ValueError, match="DSYNC_HASH_CHUNK_BYTES"):
        default_chunk_size()


def test_build_config_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DSYNC_HASH_CHUNK_BYTES", raising=False)
    config = build_config(tmp_path)
    assert config.root == tmp_path
    assert config.skip == SkipSet()
    assert config.verbose is False
    assert config.chunk_size == DEFAULT_CHUNK_SIZE


def test_resolve_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DSYNC_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.INFO
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("nonsense") == logging.INFO
    monkeypatch.setenv("DSYNC_LOG_LEVEL", "WARNING")
    assert resolve_log_level() == logging.WARNING
