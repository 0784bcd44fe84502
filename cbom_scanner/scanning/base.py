"""Scanner service interface and the pattern-based implementation."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import structlog

from cbom_scanner.exceptions import ScanningError
from cbom_scanner.models.cbom import CBOM, AssetRecord
from cbom_scanner.models.language import Language
from cbom_scanner.models.scan import IndexedUnit, PartialScanResult
from cbom_scanner.scanning.detector import CryptoDetector

log = structlog.get_logger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class ScannerService(ABC):
    """
    Abstract base class for per-language scanner services.
    Turns indexed units into a CBOM fragment plus scan statistics.
    """

    @property
    @abstractmethod
    def language(self) -> Language:
        ...

    @abstractmethod
    def scan(self, units: Sequence[IndexedUnit]) -> PartialScanResult:
        """
        Detect cryptographic assets in the given units.

        Raises:
            ScanningError: A unit cannot be read or a prerequisite is missing.
        """
        ...


class PatternScannerService(ScannerService):
    """Reads every unit and runs the language's CryptoDetector over it."""

    _language: Language

    def __init__(self, project_root: Path, detector: CryptoDetector | None = None) -> None:
        self.project_root = Path(project_root)
        self.detector = detector or CryptoDetector(self._language)

    @property
    def language(self) -> Language:
        return self._language

    def check_prerequisites(self) -> list[str]:
        """
        Check scan prerequisites.
        Returns list of missing items (empty = can run).
        """
        return []

    def prepare(self) -> None:
        """Hook run once prerequisites are met, before any unit is read."""

    def scan(self, units: Sequence[IndexedUnit]) -> PartialScanResult:
        start = now_ms()
        # Nothing to build or check when the language has no units
        missing = self.check_prerequisites() if units else []
        if missing:
            raise ScanningError(self.language.value, "; ".join(missing))
        self.prepare()

        records: list[AssetRecord] = []
        lines = 0
        for unit in units:
            try:
                source = unit.path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise ScanningError(
                    self.language.value, f"cannot read {unit.relative_path}: {e}"
                ) from e
            lines += count_lines(source)
            records.extend(self.detector.detect(source, unit.relative_path))

        cbom = CBOM.from_records(records)
        end = now_ms()
        log.info(
            "scanning.done",
            language=self.language.value,
            files=len(units),
            lines=lines,
            assets=len(cbom),
        )
        return PartialScanResult(
            language=self.language,
            cbom=cbom,
            files_scanned=len(units),
            lines_scanned=lines,
            start_time=start,
            end_time=end,
        )


def count_lines(source: str) -> int:
    if not source:
        return 0
    return source.count("\n") + (0 if source.endswith("\n") else 1)
