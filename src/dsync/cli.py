from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from dsync.config import CompareConfig, build_config
from dsync.diff.differ import diff_manifests
from dsync.errors import (
    DsyncError,
    DuplicateEntryError,
    PathAccessError,
    SerializationError,
    TraversalError,
    TypeMismatchError,
)
from dsync.manifest.builder import build_manifest
from dsync.manifest.skip import SkipSet, read_skip_file
from dsync.manifest.store import read_manifest, write_manifest, write_report
from dsync.runtime import configure_logging
from dsync.ui.render import render_manifest, render_report

app = typer.Typer(help="Content-addressed manifests of file trees and their diffs")

console = Console()
logger = logging.getLogger(__name__)

EXIT_DIFFERENCES = 1
EXIT_CODES: dict[type[DsyncError], int] = {
    PathAccessError: 3,
    TraversalError: 4,
    DuplicateEntryError: 5,
    TypeMismatchError: 6,
    SerializationError: 7,
}

PATH_OPTION = typer.Option(..., "--path", help="File or directory to describe")
GEN_OPTION = typer.Option(..., "--out", "--gen", help="Where to write the manifest")
SKIP_OPTION = typer.Option(
    None,
    "--skip",
    help="Newline-delimited directory names to skip at any depth",
)
SRC_OPTION = typer.Option(..., "--src", help="Source manifest")
DST_OPTION = typer.Option(..., "--dst", help="Dest manifest")
RESULT_OPTION = typer.Option(..., "--result", help="Where to write the diff report")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v")
CHECK_OPTION = typer.Option(False, "--check", help="Exit 1 when the manifests differ")


def _fail(action: str, exc: DsyncError) -> typer.Exit:
    code = EXIT_CODES.get(type(exc), 1)
    logger.error("%s failed kind=%s: %s", action, type(exc).__name__, exc)
    console.print(f"{action} error ({type(exc).__name__}): {exc}", markup=False)
    return typer.Exit(code=code)


@app.command("generate")
def generate(
    path: Path = PATH_OPTION,
    out: Path = GEN_OPTION,
    skip: Path | None = SKIP_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    configure_logging()
    logger.info("generate start path=%s out=%s skip=%s", path, out, skip)
    try:
        skip_set = read_skip_file(skip) if skip is not None else SkipSet()
        try:
            config = build_config(path, skip_set, verbose=verbose)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        manifest = build_manifest(config)
        write_manifest(manifest, out)
    except DsyncError as exc:
        raise _fail("generate", exc) from exc
    if verbose:
        render_manifest(manifest, console)
    console.print(f"Manifest: {out} ({len(manifest.entries)} files)")


@app.command("compare")
def compare(
    src: Path = SRC_OPTION,
    dst: Path = DST_OPTION,
    result: Path = RESULT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    check: bool = CHECK_OPTION,
) -> None:
    configure_logging()
    config = CompareConfig(source=src, dest=dst, result=result, verbose=verbose, check=check)
    logger.info("compare start src=%s dst=%s result=%s", config.source, config.dest, config.result)
    try:
        source = read_manifest(config.source)
        dest = read_manifest(config.dest)
        report = diff_manifests(source, dest)
        write_report(report, config.result)
    except DsyncError as exc:
        raise _fail("compare", exc) from exc
    if config.verbose:
        render_report(report, console)
    console.print(f"Report: {config.result}")
    if config.check and not report.is_empty():
        raise typer.Exit(code=EXIT_DIFFERENCES)


if __name__ == "__main__":
    app()
