"""Detect which templates a project needs from the files it contains.

Each :class:`Detector` pairs a template name with gitignore-style patterns
for marker files (``Cargo.toml`` means ``rust``, ``*.cabal`` means
``haskell``, ...). Patterns are compiled with :mod:`pathspec` and matched
against the regular files directly inside the project directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

import pathspec


@dataclass
class Detector:
    """Suggest *template* when any file matches one of *patterns*."""

    template: str
    patterns: Sequence[str]
    _spec: pathspec.PathSpec = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def detects(self, file_names: Iterable[str]) -> bool:
        return any(self._spec.match_file(name) for name in file_names)


DEFAULT_DETECTORS: tuple[Detector, ...] = (
    Detector("java", ["build.gradle", "pom.xml"]),
    Detector("node", ["package.json"]),
    Detector("python", ["requirements.txt"]),
    Detector("haskell", ["?*.cabal", "stack.yaml"]),
    Detector("php", ["composer.json"]),
    Detector("ruby", ["?*.gemspec", "Gemfile"]),
    Detector("rust", ["Cargo.toml"]),
)


def detect_templates(
    root: str | Path = ".",
    detectors: Sequence[Detector] = DEFAULT_DETECTORS,
) -> list[str]:
    """Return detected template names for the directory *root*.

    Only regular files at the top level of *root* are considered.
    Directories named like a marker file do not count. Names are returned
    in detector order, without duplicates.
    """
    root = Path(root)
    if not root.is_dir():
        return []
    file_names = [entry.name for entry in root.iterdir() if entry.is_file()]

    found: list[str] = []
    for detector in detectors:
        if detector.template not in found and detector.detects(file_names):
            found.append(detector.template)
    return found
