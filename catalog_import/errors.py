"""
Import Errors
Exception hierarchy for catalog CSV import.
"""

from typing import Optional


class CatalogImportError(Exception):
    """Base exception for catalog import errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MappingConfigurationError(CatalogImportError):
    """Exception raised when a mapping configuration fails validation."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, details=details)


class CsvSourceError(CatalogImportError):
    """Exception raised when the CSV source cannot be opened or read."""

    def __init__(self, path: str, message: str):
        super().__init__(
            message=f"Cannot read CSV source {path}: {message}",
            details={"path": path},
        )
