from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    relative_path: str = Field(alias="path", min_length=1)
    size_bytes: int = Field(alias="size", ge=0)
    digest: str = Field(alias="sha256", pattern=r"^[0-9a-f]{64}$")

    def same_content(self, other: FileEntry) -> bool:
        return self.size_bytes == other.size_bytes and self.digest == other.digest

    def __str__(self) -> str:
        return f"sha256:{self.digest} {self.size_bytes} {self.relative_path}"


class Manifest(BaseModel):
    """Files recorded under one build root, in walk order.

    ``is_directory`` is False only for a single-file build, in which case
    ``entries`` holds that one file keyed by its base name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_directory: bool = Field(alias="dir")
    entries: tuple[FileEntry, ...] = Field(default=(), alias="files")

    @field_validator("entries", mode="before")
    @classmethod
    def _null_entries(cls, value: Any) -> Any:
        return () if value is None else value

    @model_validator(mode="after")
    def _single_file_has_one_entry(self) -> Manifest:
        if not self.is_directory and len(self.entries) != 1:
            raise ValueError(
                f"file manifest must hold exactly one entry, got {len(self.entries)}"
            )
        return self

    def paths(self) -> list[str]:
        return [entry.relative_path for entry in self.entries]


class ModifiedPair(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: FileEntry = Field(alias="src")
    dest: FileEntry = Field(alias="dst")

    @property
    def relative_path(self) -> str:
        return self.source.relative_path


class DiffReport(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    modified: tuple[ModifiedPair, ...] = Field(default=(), alias="diff")
    source_only: tuple[FileEntry, ...] = Field(default=(), alias="src_only")
    dest_only: tuple[FileEntry, ...] = Field(default=(), alias="dst_only")

    @field_validator("modified", "source_only", "dest_only", mode="before")
    @classmethod
    def _null_collections(cls, value: Any) -> Any:
        return () if value is None else value

    def is_empty(self) -> bool:
        return not (self.modified or self.source_only or self.dest_only)

    def affected_paths(self) -> set[str]:
        paths = {pair.relative_path for pair in self.modified}
        paths.update(entry.relative_path for entry in self.source_only)
        paths.update(entry.relative_path for entry in self.dest_only)
        return paths

    def swapped(self) -> DiffReport:
        return DiffReport(
            modified=tuple(
                ModifiedPair(source=pair.dest, dest=pair.source) for pair in self.modified
            ),
            source_only=self.dest_only,
            dest_only=self.source_only,
        )
