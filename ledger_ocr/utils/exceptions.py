"""
Custom Exceptions Module.

This module defines the custom exceptions used by the ledger OCR engine.
Parsing and reconciliation never raise for malformed input; these
exceptions live at the capability and I/O seams only (the OCR backend,
configuration and export) and are converted into result data at the
pipeline boundary.

Exception Hierarchy:
    LedgerOCRError (base)
    ├── InputError
    │   └── UnsupportedFileTypeError
    ├── OCRError
    │   ├── OCREngineNotAvailableError
    │   └── OCRProcessingError
    ├── ConfigurationError
    └── OutputError
        └── ExcelExportError
"""


class LedgerOCRError(Exception):
    """
    Base exception for all ledger OCR errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(LedgerOCRError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".png", ".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(LedgerOCRError):
    """Base exception for OCR capability failures."""
    pass


class OCREngineNotAvailableError(OCRError):
    """Raised when the configured OCR engine cannot be initialized."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(OCRError):
    """Raised when text recognition fails for an image."""

    def __init__(self, source: str, reason: str = None):
        message = f"OCR processing failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(LedgerOCRError):
    """Raised when the settings file, or a setting in it, is unusable."""

    def __init__(self, key: str, reason: str = None):
        message = f"Invalid configuration: {key}"
        details = {"key": key, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(LedgerOCRError):
    """Base exception for output handling errors."""
    pass


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'LedgerOCRError',
    'InputError',
    'UnsupportedFileTypeError',
    'OCRError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'ConfigurationError',
    'OutputError',
    'ExcelExportError',
]
