from __future__ import annotations

import logging
from collections.abc import Iterable

from dsync.errors import DuplicateEntryError, TypeMismatchError
from dsync.manifest.models import DiffReport, FileEntry, Manifest, ModifiedPair

logger = logging.getLogger(__name__)


def index_entries(entries: Iterable[FileEntry], side: str = "manifest") -> dict[str, FileEntry]:
    index: dict[str, FileEntry] = {}
    for entry in entries:
        if entry.relative_path in index:
            raise DuplicateEntryError(entry.relative_path, side)
        index[entry.relative_path] = entry
    return index


def diff_manifests(source: Manifest, dest: Manifest) -> DiffReport:
    """Classify every path of two manifests by set algebra over their keys.

    Paths in both with equal size and digest are dropped; the rest of the
    intersection becomes ``modified``. Each collection is sorted by path.
    """
    if source.is_directory != dest.is_directory:
        raise TypeMismatchError(source.is_directory, dest.is_directory)
    src_index = index_entries(source.entries, side="source")
    dst_index = index_entries(dest.entries, side="dest")
    src_keys = src_index.keys()
    dst_keys = dst_index.keys()

    modified = tuple(
        ModifiedPair(source=src_index[path], dest=dst_index[path])
        for path in sorted(src_keys & dst_keys)
        if not src_index[path].same_content(dst_index[path])
    )
    source_only = tuple(src_index[path] for path in sorted(src_keys - dst_keys))
    dest_only = tuple(dst_index[path] for path in sorted(dst_keys - src_keys))
    logger.info(
        "diff complete modified=%s src_only=%s dst_only=%s",
        len(modified),
        len(source_only),
        len(dest_only),
    )
    return DiffReport(modified=modified, source_only=source_only, dest_only=dest_only)
