from __future__ import annotations

from rich.console import Console
from rich.table import Table

from dsync.manifest.models import DiffReport, FileEntry, Manifest


def render_manifest(manifest: Manifest, console: Console | None = None) -> None:
    console = console or Console()
    store_type = "dir" if manifest.is_directory else "file"
    console.print(f"Store type: {store_type}", markup=False)
    for entry in manifest.entries:
        console.print(str(entry), markup=False, highlight=False)


def render_report(report: DiffReport, console: Console | None = None) -> None:
    console = console or Console()
    if report.is_empty():
        console.print("No differences")
        return
    if report.modified:
        table = Table(title="Modified")
        table.add_column("Path")
        table.add_column("Source size", justify="right")
        table.add_column("Dest size", justify="right")
        table.add_column("Source sha256")
        table.add_column("Dest sha256")
        for pair in report.modified:
            table.add_row(
                pair.relative_path,
                str(pair.source.size_bytes),
                str(pair.dest.size_bytes),
                pair.source.digest[:12],
                pair.dest.digest[:12],
            )
        console.print(table)
    if report.source_only:
        console.print(_entries_table("Source only", report.source_only))
    if report.dest_only:
        console.print(_entries_table("Dest only", report.dest_only))
    console.print(
        f"modified={len(report.modified)} "
        f"src_only={len(report.source_only)} "
        f"dst_only={len(report.dest_only)}"
    )


def _entries_table(title: str, entries: tuple[FileEntry, ...]) -> Table:
    table = Table(title=title)
    table.add_column("Path")
    table.add_column("Size", justify="right")
    table.add_column("sha256")
    for entry in entries:
        table.add_row(entry.relative_path, str(entry.size_bytes), entry.digest[:12])
    return table
