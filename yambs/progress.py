"""Tracking build progress by counting object files that exist on disk."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

PROGRESS_FILE_NAME = "progress.json"


def _find_target(targets: Sequence[Mapping[str, Any]], name: str) -> Mapping[str, Any]:
    for candidate in targets:
        if candidate["target"] == name:
            return candidate
    raise KeyError(f"No progress tracking target named {name!r}")


def object_files_from_target(
    targets: Sequence[Mapping[str, Any]], target: str
) -> list[Path]:
    """Object files of a target's dependencies (without repeats), then its own."""
    progress_target = _find_target(targets, target)
    object_files: list[Path] = []
    for dependency in progress_target.get("dependencies", []):
        for object_file in _find_target(targets, dependency).get("object_files", []):
            object_file = Path(object_file)
            if object_file not in object_files:
                object_files.append(object_file)
    object_files.extend(Path(p) for p in progress_target.get("object_files", []))
    return object_files


@dataclass
class Progress:
    total: int
    current: int
    targets_to_build: list[Path] = field(default_factory=list)

    @classmethod
    def from_directory(
        cls, path: str | os.PathLike, target: str | None = None
    ) -> Progress:
        """Read the progress document in ``path`` and count what is already built."""
        progress_file = Path(path) / PROGRESS_FILE_NAME
        with progress_file.open(encoding="utf-8") as fh:
            document = json.load(fh)
        object_files = object_files_from_target(
            document["targets"], "all" if target is None else target
        )
        return cls(
            total=len(object_files),
            current=sum(1 for f in object_files if f.exists()),
            targets_to_build=object_files,
        )

    def update(self) -> None:
        """Recount the object files that exist."""
        self.current = sum(1 for f in self.targets_to_build if f.exists())