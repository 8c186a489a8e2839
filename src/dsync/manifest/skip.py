from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from dsync.errors import PathAccessError

logger = logging.getLogger(__name__)


class WalkDecision(Enum):
    DESCEND = "descend"
    PRUNE = "prune"


class TraversalPolicy(Protocol):
    def decide(self, directory_name: str) -> WalkDecision: ...


@dataclass(frozen=True)
class SkipSet:
    """Bare directory names pruned at any depth of a walk.

    Matching is by base name only: ``build`` prunes ``build/``,
    ``src/build/`` and ``a/b/build/`` alike. Files are never matched.
    """

    names: frozenset[str] = frozenset()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> SkipSet:
        names: set[str] = set()
        for raw in lines:
            name = raw.strip()
            if not name:
                continue
            if "/" in name or (os.sep != "/" and os.sep in name):
                logger.warning("skip entry %r contains a path separator and never matches", name)
            names.add(name)
        return cls(names=frozenset(names))

    def should_prune(self, directory_name: str) -> bool:
        return directory_name in self.names

    def decide(self, directory_name: str) -> WalkDecision:
        if self.should_prune(directory_name):
            return WalkDecision.PRUNE
        return WalkDecision.DESCEND

    def __contains__(self, directory_name: object) -> bool:
        return directory_name in self.names

    def __len__(self) -> int:
        return len(self.names)


def read_skip_file(path: Path) -> SkipSet:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PathAccessError(path, f"cannot read skip file: {exc}") from exc
    skip = SkipSet.from_lines(text.splitlines())
    logger.debug("loaded %s skip names from %s", len(skip), path)
    return skip
