"""Indexing service interface and the file-system implementation shared by all languages."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

import structlog

from cbom_scanner.exceptions import IndexingError
from cbom_scanner.models.language import Language
from cbom_scanner.models.scan import IndexedUnit

log = structlog.get_logger(__name__)

# Directories never worth descending into
SKIP_DIRS = {
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".vscode",
    "node_modules",
    "__pycache__",
    ".tox",
    ".venv",
    "venv",
    ".eggs",
    ".gradle",
    ".mvn",
}


class IndexingService(ABC):
    """
    Abstract base class for per-language indexing services.
    Each implementation enumerates the scannable units of one language.
    """

    @property
    @abstractmethod
    def language(self) -> Language:
        ...

    @abstractmethod
    def set_exclusion_patterns(self, patterns: Iterable[str] | None) -> None:
        """Replace the exclusion patterns. None or empty disables exclusion."""
        ...

    @abstractmethod
    def index(self) -> list[IndexedUnit]:
        """
        Enumerate candidate units.

        Returns:
            Units ordered by relative path.

        Raises:
            IndexingError: The project tree cannot be enumerated.
        """
        ...


class FileSystemIndexService(IndexingService):
    """
    Walks the project root and keeps files with one of the language's extensions.
    A file is excluded when its lower-cased relative path contains any pattern.
    """

    extensions: tuple[str, ...] = ()
    _language: Language

    def __init__(self, project_root: Path) -> None:
        self.project_root = Path(project_root)
        self._exclusion_patterns: frozenset[str] = frozenset()

    @property
    def language(self) -> Language:
        return self._language

    @property
    def exclusion_patterns(self) -> frozenset[str]:
        return self._exclusion_patterns

    def set_exclusion_patterns(self, patterns: Iterable[str] | None) -> None:
        self._exclusion_patterns = frozenset(
            p.strip().lower() for p in (patterns or ()) if p and p.strip()
        )

    def index(self) -> list[IndexedUnit]:
        root = self.project_root
        if not root.is_dir():
            raise IndexingError(self.language.value, f"project root not found: {root}")

        def _on_error(err: OSError) -> None:
            raise IndexingError(self.language.value, f"cannot read {err.filename}: {err.strerror}")

        units: list[IndexedUnit] = []
        excluded = 0
        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for name in filenames:
                if not self.accepts(name):
                    continue
                path = Path(dirpath) / name
                rel = path.relative_to(root).as_posix()
                if self.is_excluded(rel):
                    excluded += 1
                    continue
                units.append(IndexedUnit(path=path, relative_path=rel, language=self.language))

        units.sort(key=lambda u: u.relative_path)
        log.info(
            "indexing.done",
            language=self.language.value,
            units=len(units),
            excluded=excluded,
        )
        return units

    def accepts(self, filename: str) -> bool:
        return filename.lower().endswith(self.extensions)

    def is_excluded(self, relative_path: str) -> bool:
        lowered = relative_path.lower()
        return any(p in lowered for p in self._exclusion_patterns)
