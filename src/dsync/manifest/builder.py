from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from dsync.config import BuildConfig
from dsync.diff.differ import index_entries
from dsync.errors import PathAccessError, TraversalError
from dsync.manifest.canonical import sha256_file
from dsync.manifest.models import FileEntry, Manifest
from dsync.manifest.skip import TraversalPolicy, WalkDecision

logger = logging.getLogger(__name__)


def build_manifest(config: BuildConfig) -> Manifest:
    """Hash every regular file under ``config.root`` into a manifest.

    A regular-file root yields a single entry named by its base name. A
    directory root is walked depth-first with names sorted inside each
    directory; directories rejected by ``config.skip`` are pruned with their
    whole subtree, the root included. Any I/O failure aborts the build.
    """
    root = Path(config.root)
    try:
        info = os.stat(root)
    except OSError as exc:
        raise PathAccessError(root, exc.strerror or str(exc)) from exc

    if stat.S_ISREG(info.st_mode):
        entry = _hash_entry(root, portable_path(root.name), info.st_size, config)
        logger.info("manifest built root=%s type=file files=1", root)
        return Manifest(is_directory=False, entries=(entry,))
    if not stat.S_ISDIR(info.st_mode):
        raise PathAccessError(root, "not a regular file or directory")

    root_abs = Path(os.path.abspath(root))
    entries: list[FileEntry] = []
    for path, size in walk_files(root_abs, config.skip):
        relpath = portable_path(Path(os.path.abspath(path)).relative_to(root_abs).as_posix())
        entries.append(_hash_entry(path, relpath, size, config))
    index_entries(entries, side="built manifest")
    logger.info("manifest built root=%s type=dir files=%s", root, len(entries))
    return Manifest(is_directory=True, entries=tuple(entries))


def portable_path(name: str) -> str:
    """Replace undecodable filesystem bytes with U+FFFD so the path is valid UTF-8."""
    return os.fsencode(name).decode("utf-8", "replace")


def walk_files(root: Path, policy: TraversalPolicy) -> Iterator[tuple[Path, int]]:
    """Yield ``(path, size)`` for regular files in lexical depth-first order."""
    if policy.decide(root.name) is WalkDecision.PRUNE:
        logger.debug("prune dir=%s", root)
        return
    yield from _walk_dir(root, policy)


def _walk_dir(directory: Path, policy: TraversalPolicy) -> Iterator[tuple[Path, int]]:
    try:
        with os.scandir(directory) as listing:
            children = sorted(listing, key=lambda item: item.name)
    except OSError as exc:
        raise TraversalError(directory, exc) from exc

    for child in children:
        path = Path(child.path)
        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise TraversalError(path, exc) from exc
        if is_dir:
            if policy.decide(child.name) is WalkDecision.PRUNE:
                logger.debug("prune dir=%s", path)
                continue
            yield from _walk_dir(path, policy)
            continue
        try:
            info = child.stat(follow_symlinks=True)
        except OSError as exc:
            raise TraversalError(path, exc) from exc
        if stat.S_ISREG(info.st_mode):
            yield path, info.st_size
        elif stat.S_ISDIR(info.st_mode):
            logger.debug("skip symlinked dir=%s", path)
        else:
            logger.debug("skip special file=%s", path)


def _hash_entry(path: Path, relpath: str, size: int, config: BuildConfig) -> FileEntry:
    if config.verbose:
        logger.info("reading file: %s", os.path.abspath(path))
    else:
        logger.debug("reading file: %s", os.path.abspath(path))
    try:
        digest = sha256_file(path, config.chunk_size)
    except OSError as exc:
        raise TraversalError(path, exc) from exc
    return FileEntry(relative_path=relpath, size_bytes=size, digest=digest)
