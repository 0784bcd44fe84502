"""Data models for indexing and scanning results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cbom_scanner.models.cbom import CBOM
from cbom_scanner.models.language import Language


@dataclass(frozen=True)
class IndexedUnit:
    """One scannable unit (a source file) produced by an indexing service."""

    path: Path  # absolute
    relative_path: str  # POSIX, relative to project root
    language: Language


@dataclass(frozen=True)
class PartialScanResult:
    """
    Output of one language's scanner service.
    Timestamps are epoch milliseconds.
    """

    language: Language
    cbom: CBOM
    files_scanned: int
    lines_scanned: int
    start_time: int
    end_time: int

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time


@dataclass
class AggregateStatistics:
    """Running totals across all processed languages."""

    files_scanned: int = 0
    lines_scanned: int = 0
    elapsed_ms: int = 0
    languages: list[Language] = field(default_factory=list)

    def add(self, result: PartialScanResult) -> None:
        self.files_scanned += result.files_scanned
        self.lines_scanned += result.lines_scanned
        self.elapsed_ms += result.duration_ms
        self.languages.append(result.language)

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0
