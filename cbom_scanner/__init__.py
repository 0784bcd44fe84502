"""cbom-scanner: Multi-language Cryptography Bill of Materials scan orchestration."""

__version__ = "0.1.0"

from cbom_scanner.merger import CBOMMerger, merge
from cbom_scanner.models import (
    CBOM,
    AggregateStatistics,
    AssetLocation,
    AssetRecord,
    IndexedUnit,
    Language,
    PartialScanResult,
)
from cbom_scanner.orchestrator import ScanOrchestrator
from cbom_scanner.selector import LanguageSelector, ScanTarget, resolve_languages
from cbom_scanner.writer import ReportWriter

__all__ = [
    "AggregateStatistics",
    "AssetLocation",
    "AssetRecord",
    "CBOM",
    "CBOMMerger",
    "IndexedUnit",
    "Language",
    "LanguageSelector",
    "PartialScanResult",
    "ReportWriter",
    "ScanOrchestrator",
    "ScanTarget",
    "merge",
    "resolve_languages",
]
