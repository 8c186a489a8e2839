from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from dsync.errors import SerializationError
from dsync.manifest.canonical import canonical_model_bytes
from dsync.manifest.models import DiffReport, Manifest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def dumps_manifest(manifest: Manifest) -> bytes:
    return canonical_model_bytes(manifest)


def loads_manifest(data: bytes, path: Path | None = None) -> Manifest:
    return _loads(Manifest, data, path)


def write_manifest(manifest: Manifest, path: Path) -> None:
    _write_bytes(path, _encode(dumps_manifest, manifest, path))
    logger.info("manifest written path=%s files=%s", path, len(manifest.entries))


def read_manifest(path: Path) -> Manifest:
    return loads_manifest(_read_bytes(path), path)


def dumps_report(report: DiffReport) -> bytes:
    return canonical_model_bytes(report)


def loads_report(data: bytes, path: Path | None = None) -> DiffReport:
    return _loads(DiffReport, data, path)


def write_report(report: DiffReport, path: Path) -> None:
    _write_bytes(path, _encode(dumps_report, report, path))
    logger.info("report written path=%s", path)


def read_report(path: Path) -> DiffReport:
    return loads_report(_read_bytes(path), path)


def _loads(model: type[ModelT], data: bytes, path: Path | None) -> ModelT:
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SerializationError(path, f"invalid json: {exc}") from exc
    if not isinstance(payload, dict):
        raise SerializationError(path, f"expected a json object, got {type(payload).__name__}")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SerializationError(path, f"invalid {model.__name__.lower()}: {exc}") from exc


def _encode(dumps: Callable[[ModelT], bytes], model: ModelT, path: Path) -> bytes:
    try:
        return dumps(model)
    except ValueError as exc:
        raise SerializationError(path, f"cannot encode: {exc}") from exc


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SerializationError(path, f"cannot read: {exc}") from exc


def _write_bytes(path: Path, data: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise SerializationError(path, f"cannot write: {exc}") from exc
