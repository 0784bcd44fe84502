"""Go scanner."""

from __future__ import annotations

from cbom_scanner.models.language import Language
from cbom_scanner.scanning.base import PatternScannerService


class GoScannerService(PatternScannerService):
    _language = Language.GO
