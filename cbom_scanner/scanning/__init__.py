"""Per-language scanner services."""

from cbom_scanner.scanning.base import PatternScannerService, ScannerService
from cbom_scanner.scanning.detector import CryptoDetector
from cbom_scanner.scanning.go import GoScannerService
from cbom_scanner.scanning.java import JavaScannerService
from cbom_scanner.scanning.python import PythonScannerService

__all__ = [
    "CryptoDetector",
    "GoScannerService",
    "JavaScannerService",
    "PatternScannerService",
    "PythonScannerService",
    "ScannerService",
]
