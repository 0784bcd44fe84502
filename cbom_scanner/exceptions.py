"""Custom exceptions for cbom-scanner."""


class CBOMScannerError(Exception):
    """Base exception for all scanner errors."""


class ConfigurationError(CBOMScannerError):
    """Raised when required configuration is missing or invalid."""


class IndexingError(CBOMScannerError):
    """Raised when a language's indexing service cannot enumerate its units."""

    def __init__(self, language: str, message: str):
        self.language = language
        super().__init__(f"[{language}] indexing failed: {message}")


class ScanningError(CBOMScannerError):
    """Raised when a language's scanner service fails."""

    def __init__(self, language: str, message: str):
        self.language = language
        super().__init__(f"[{language}] scanning failed: {message}")


class WriteError(CBOMScannerError):
    """Raised when the consolidated CBOM cannot be persisted."""
