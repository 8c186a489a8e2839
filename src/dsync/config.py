from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dsync.manifest.skip import SkipSet

DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class BuildConfig:
    root: Path
    skip: SkipSet = field(default_factory=SkipSet)
    verbose: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class CompareConfig:
    source: Path
    dest: Path
    result: Path
    verbose: bool = False
    check: bool = False


def default_chunk_size() -> int:
    raw = os.getenv("DSYNC_HASH_CHUNK_BYTES", "").strip()
    if not raw:
        return DEFAULT_CHUNK_SIZE
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"DSYNC_HASH_CHUNK_BYTES must be an integer: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"DSYNC_HASH_CHUNK_BYTES must be positive: {value}")
    return value


def build_config(
    root: Path,
    skip: SkipSet | None = None,
    *,
    verbose: bool = False,
) -> BuildConfig:
    return BuildConfig(
        root=root,
        skip=skip or SkipSet(),
        verbose=verbose,
        chunk_size=default_chunk_size(),
    )
