from __future__ import annotations

from pathlib import Path


class DsyncError(Exception):
    """Base class for every fatal build, diff or persistence failure."""


class PathAccessError(DsyncError):
    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot access {self.path}: {reason}")


class TraversalError(DsyncError):
    """I/O failure while walking or hashing; ``path`` is the entry being processed."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"walk failed at {self.path}: {cause}")


class DuplicateEntryError(DsyncError):
    def __init__(self, path: str, side: str = "manifest") -> None:
        self.path = path
        self.side = side
        super().__init__(f"{side} has duplicated record: {path}")


class TypeMismatchError(DsyncError):
    def __init__(self, source_is_directory: bool, dest_is_directory: bool) -> None:
        self.source_is_directory = source_is_directory
        self.dest_is_directory = dest_is_directory
        super().__init__(
            "source manifest is a "
            f"{_kind(source_is_directory)} manifest but dest manifest is a "
            f"{_kind(dest_is_directory)} manifest"
        )


class SerializationError(DsyncError):
    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = str(path) if path is not None else None
        self.reason = reason
        where = self.path or "<memory>"
        super().__init__(f"{where}: {reason}")


def _kind(is_directory: bool) -> str:
    return "dir" if is_directory else "file"
