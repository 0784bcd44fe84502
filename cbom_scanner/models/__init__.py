"""Data model for the CBOM scan pipeline."""

from cbom_scanner.models.cbom import CBOM, AssetLocation, AssetRecord
from cbom_scanner.models.language import Language
from cbom_scanner.models.scan import AggregateStatistics, IndexedUnit, PartialScanResult

__all__ = [
    "AggregateStatistics",
    "AssetLocation",
    "AssetRecord",
    "CBOM",
    "IndexedUnit",
    "Language",
    "PartialScanResult",
]
