from __future__ import annotations

import hashlib
from pathlib import Path

from dsync.manifest.canonical import canonical_json_bytes, sha256_file


def test_canonical_json_stability() -> None:
    obj1 = {"b": 1, "a": 2}
    obj2 = {"a": 2, "b": 1}
    assert canonical_json_bytes(obj1) == canonical_json_bytes(obj2)
    assert canonical_json_bytes(obj1) == b'{"a":2,"b":1}'


def test_canonical_json_keeps_unicode() -> None:
    assert canonical_json_bytes({"path": "dir/café.txt"}) == '{"path":"dir/café.txt"}'.encode()


def test_sha256_file_matches_bytes(tmp_path: Path) -> None:
    data = b"0123456789" * 1000
    target = tmp_path / "data.bin"
    target.write_bytes(data)
    assert sha256_file(target, chunk_size=13) == hashlib.sha256(data).hexdigest()


def test_sha256_file_empty(tmp_path: Path) -> None:
    target = tmp_path / "empty"
    target.write_bytes(b"")
    assert sha256_file(target) == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
